"""
Submission Service
One answer per (attempt, question), last write wins
"""
from flask import current_app
from sqlalchemy.exc import IntegrityError

from mentortests.extensions import db
from mentortests.models import TestQuestion, TestSubmission
from mentortests.errors import (
    InvalidInputError, QuestionNotFoundError, AttemptNotFoundError, CompletedAttemptError
)
from mentortests.services.attempt_service import AttemptService
from mentortests.utils import now_utc


class SubmissionService:
    """Service for recording answers"""

    @staticmethod
    def submit_answer(test_id, question_id, answer, user_id, attempt_id=None):
        """
        Record or replace the answer to one question

        Args:
            test_id: Test the question belongs to
            question_id: Question being answered
            answer: Free text, empty string allowed
            user_id: Student submitting
            attempt_id: Optional explicit attempt; falls back to the in-progress one

        Returns:
            dict: attempt, submission and whether an existing row was updated
        """
        if answer is None:
            raise InvalidInputError("answer is required")

        AttemptService.get_test(test_id)

        question = TestQuestion.query.filter_by(id=question_id, test_id=test_id).first()
        if question is None:
            raise QuestionNotFoundError()

        attempt = AttemptService.resolve(test_id, user_id, attempt_id)
        if attempt is None:
            raise AttemptNotFoundError()
        if attempt.is_completed:
            raise CompletedAttemptError()

        attempt_pk = attempt.id
        submission = TestSubmission.query.filter_by(
            attempt_id=attempt_pk,
            question_id=question_id
        ).first()
        updated = submission is not None

        if submission is None:
            submission = TestSubmission(
                attempt_id=attempt_pk,
                question_id=question_id,
                answer=answer,
                submitted_at=now_utc(),
            )
            db.session.add(submission)
            try:
                db.session.commit()
            except IntegrityError:
                # Lost an insert race on the same question; apply as an update
                db.session.rollback()
                submission = TestSubmission.query.filter_by(
                    attempt_id=attempt_pk,
                    question_id=question_id
                ).one()
                updated = True

        if updated:
            submission.answer = answer
            submission.submitted_at = now_utc()
            db.session.commit()

        current_app.logger.info(
            "%s answer for question %s in attempt %s",
            "Updated" if updated else "Recorded", question_id, attempt_pk
        )
        return {'attempt': attempt, 'submission': submission, 'updated': updated}
