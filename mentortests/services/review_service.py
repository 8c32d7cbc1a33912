"""
Review Service
Read-only views over attempts for mentors and students
"""
from mentortests.extensions import db
from mentortests.models import TestAttempt, TestSubmission
from mentortests.errors import AttemptNotFoundError, ForbiddenError
from mentortests.services.attempt_service import AttemptService


class ReviewService:
    """Attempt listings and submission details"""

    @staticmethod
    def list_my_attempts(user_id):
        """Student's own attempts, newest first"""
        attempts = TestAttempt.query.filter_by(user_id=user_id)\
            .order_by(TestAttempt.started_at.desc(), TestAttempt.id.desc()).all()

        return [
            dict(
                attempt.to_dict(),
                test={
                    **attempt.test.to_dict(with_questions=False),
                    'owner': attempt.test.owner.to_summary(),
                },
                submissionCount=len(attempt.submissions),
            )
            for attempt in attempts
        ]

    @staticmethod
    def list_test_attempts(test_id, mentor_id):
        """All attempts for a test; owning mentor only"""
        test = AttemptService.get_test(test_id)
        if not test.owned_by(mentor_id):
            raise ForbiddenError("Only the mentor who created this test can view its submissions")

        attempts = TestAttempt.query.filter_by(test_id=test_id)\
            .order_by(TestAttempt.started_at.desc(), TestAttempt.id.desc()).all()

        rows = [
            dict(
                attempt.to_dict(),
                user=attempt.user.to_summary(),
                test={'id': test.id, 'title': test.title},
                answerCount=len(attempt.submissions),
            )
            for attempt in attempts
        ]
        return rows, test.to_dict(with_questions=False)

    @staticmethod
    def get_attempt_details(attempt_id, viewer):
        """
        Submissions for one attempt plus attempt info

        Visible to the owning mentor and to the student who made the attempt.
        """
        attempt = db.session.get(TestAttempt, attempt_id)
        if attempt is None:
            raise AttemptNotFoundError("Test attempt not found")

        if viewer.id != attempt.user_id and not attempt.test.owned_by(viewer.id):
            raise ForbiddenError()

        submissions = TestSubmission.query.filter_by(attempt_id=attempt.id)\
            .order_by(TestSubmission.submitted_at.asc(), TestSubmission.id.asc()).all()

        info = dict(
            attempt.to_dict(),
            user=attempt.user.to_summary(),
            test=attempt.test.to_dict(),
        )
        return [s.to_dict(with_question=True) for s in submissions], info
