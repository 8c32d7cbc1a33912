"""
Catalog Service
Mentor-authored tests, filed under class and subject
"""
from flask import current_app
from sqlalchemy import func

from mentortests.extensions import db
from mentortests.models import Classroom, Subject, Test, TestQuestion, TestAttempt
from mentortests.errors import ForbiddenError, InvalidInputError, TestNotFoundError
from mentortests.services.attempt_service import AttemptService
from mentortests.utils import isoformat


class CatalogService:
    """Test creation, listing and deletion"""

    @staticmethod
    def find_or_create_class(name):
        classroom = Classroom.query.filter_by(name=name).first()
        if classroom is None:
            classroom = Classroom(name=name)
            db.session.add(classroom)
            db.session.flush()
            current_app.logger.info("Created class %s", name)
        return classroom

    @staticmethod
    def find_or_create_subject(name, classroom):
        subject = Subject.query.filter_by(name=name, class_id=classroom.id).first()
        if subject is None:
            subject = Subject(name=name, class_id=classroom.id)
            db.session.add(subject)
            db.session.flush()
            current_app.logger.info("Created subject %s in class %s", name, classroom.name)
        return subject

    @staticmethod
    def find_class_by_name(name):
        """Case-insensitive exact match, then contains match"""
        name = name.strip()
        classroom = Classroom.query.filter(func.lower(Classroom.name) == name.lower()).first()
        if classroom is None:
            literal = name.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')
            classroom = Classroom.query.filter(
                Classroom.name.ilike(f'%{literal}%', escape='\\')
            ).first()
        return classroom

    @staticmethod
    def create_test(mentor_id, data):
        """
        Create a test with its questions

        Args:
            mentor_id: Owning mentor
            data: CreateTestRequest

        Returns:
            Test
        """
        classroom = CatalogService.find_or_create_class(data.classname)
        subject = CatalogService.find_or_create_subject(data.subjectname, classroom)

        test = Test(
            title=data.title,
            description=data.description,
            mentor_id=mentor_id,
            class_id=classroom.id,
            subject_id=subject.id,
        )
        db.session.add(test)
        db.session.flush()

        for order, item in enumerate(data.questions):
            db.session.add(TestQuestion(test_id=test.id, order=order, question=item.question))

        db.session.commit()
        current_app.logger.info(
            "Mentor %s created test %s with %d questions", mentor_id, test.id, len(data.questions)
        )
        return test

    @staticmethod
    def summarize(test, with_questions=True):
        data = test.to_dict(with_questions=with_questions)
        data.update({
            'createdAt': isoformat(test.created_at),
            'class': test.classroom.to_dict(),
            'subject': test.subject.to_dict(),
            'questionCount': len(test.questions),
            'submissionCount': len(test.attempts),
        })
        return data

    @staticmethod
    def list_mentor_tests(mentor_id):
        tests = Test.query.filter_by(mentor_id=mentor_id)\
            .order_by(Test.created_at.desc(), Test.id.desc()).all()
        return [CatalogService.summarize(test) for test in tests]

    @staticmethod
    def get_questions(test_id):
        test = AttemptService.get_test(test_id)
        return [q.to_dict() for q in test.questions]

    @staticmethod
    def delete_test(test_id, mentor_id):
        test = db.session.get(Test, test_id)
        if test is None:
            raise TestNotFoundError("Test not found.")
        if not test.owned_by(mentor_id):
            raise ForbiddenError("Access denied. You must be the creator of the test to delete it.")

        db.session.delete(test)
        db.session.commit()
        current_app.logger.info("Mentor %s deleted test %s", mentor_id, test_id)

    @staticmethod
    def list_class_tests(student):
        """
        Tests filed under the student's class, with the student's attempt state

        Returns:
            tuple: (list of test dicts, class dict or None)
        """
        if not student.classname or not student.classname.strip():
            raise InvalidInputError("User does not have a classname assigned")

        classroom = CatalogService.find_class_by_name(student.classname)
        if classroom is None:
            return [], None

        tests = Test.query.filter_by(class_id=classroom.id)\
            .order_by(Test.created_at.desc(), Test.id.desc()).all()
        attempts = TestAttempt.query.filter_by(user_id=student.id).all()

        results = []
        for test in tests:
            mine = [a for a in attempts if a.test_id == test.id]
            scored = next((a.score for a in mine if a.score is not None), None)
            data = CatalogService.summarize(test)
            data.update({
                'owner': test.owner.to_summary(),
                'attempts': bool(mine),
                'completed': any(a.is_completed for a in mine),
                'score': scored,
            })
            results.append(data)
        return results, classroom.to_dict()
