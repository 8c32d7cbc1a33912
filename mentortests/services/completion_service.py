"""
Completion Service
Marks an attempt completed; repeated calls are not errors
"""
from flask import current_app

from mentortests.extensions import db
from mentortests.models import TestAttempt
from mentortests.errors import AttemptNotFoundError
from mentortests.services.attempt_service import AttemptService
from mentortests.utils import now_utc


class CompletionService:
    """InProgress -> Completed transition"""

    @staticmethod
    def find_completed(test_id, user_id):
        return TestAttempt.query.filter(
            TestAttempt.test_id == test_id,
            TestAttempt.user_id == user_id,
            TestAttempt.completed_at.isnot(None)
        ).order_by(TestAttempt.completed_at.desc()).first()

    @staticmethod
    def finish_attempt(test_id, user_id, attempt_id=None):
        """
        Finish the attempt; idempotent

        Returns:
            dict: attempt and already_completed flag
        """
        AttemptService.get_test(test_id)

        attempt = AttemptService.resolve(test_id, user_id, attempt_id)

        if attempt is None:
            completed = CompletionService.find_completed(test_id, user_id)
            if completed is not None:
                current_app.logger.info("Attempt %s already completed", completed.id)
                return {'attempt': completed, 'already_completed': True}
            raise AttemptNotFoundError("Test attempt not found or already completed")

        if attempt.is_completed:
            return {'attempt': attempt, 'already_completed': True}

        # Conditional update so a racing finish cannot move completed_at
        changed = TestAttempt.query.filter_by(
            id=attempt.id,
            completed_at=None
        ).update({'completed_at': now_utc()}, synchronize_session=False)
        db.session.commit()
        db.session.refresh(attempt)

        if not changed:
            current_app.logger.info("Attempt %s was completed concurrently", attempt.id)
            return {'attempt': attempt, 'already_completed': True}

        current_app.logger.info("Completed attempt %s for user %s", attempt.id, user_id)
        return {'attempt': attempt, 'already_completed': False}
