"""
Scoring Service
Mentor grades a completed attempt; the student is notified best-effort
"""
from flask import current_app

from mentortests.extensions import db
from mentortests.models import TestAttempt
from mentortests.errors import AttemptNotFoundError, ForbiddenError, StateConflictError
from mentortests.schemas import coerce_score
from mentortests.services.notification_service import NotificationService


class ScoringService:
    """Service for scoring attempts"""

    @staticmethod
    def build_scored_payload(attempt):
        return {
            'userId': attempt.user_id,
            'testId': attempt.test_id,
            'attemptId': attempt.id,
            'score': attempt.score,
            'testTitle': attempt.test.title,
        }

    @staticmethod
    def score_attempt(attempt_id, score, grader_id):
        """
        Set the score on an attempt

        Only the mentor who owns the test may score it, and only once the
        attempt is completed. The notification is sent after the commit and
        its outcome never affects the result.
        """
        score = coerce_score(score)

        attempt = db.session.get(TestAttempt, attempt_id)
        if attempt is None:
            raise AttemptNotFoundError("Test attempt not found")

        if not attempt.test.owned_by(grader_id):
            raise ForbiddenError("Only the mentor who created this test can score it")

        if not attempt.is_completed:
            raise StateConflictError("Cannot score a test attempt that is still in progress")

        attempt.score = score
        db.session.commit()
        current_app.logger.info("Scored attempt %s: %s (grader %s)", attempt.id, score, grader_id)

        payload = ScoringService.build_scored_payload(attempt)
        NotificationService.notify_user(
            attempt.user_id,
            current_app.config.get('SCORED_EVENT', 'testScored'),
            payload
        )
        return attempt
