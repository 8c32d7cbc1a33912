"""
Attempt Service
Starts or resumes the single in-progress attempt per (test, user)
"""
from flask import current_app
from sqlalchemy.exc import IntegrityError

from mentortests.extensions import db
from mentortests.models import Test, TestAttempt
from mentortests.errors import TestNotFoundError
from mentortests.utils import now_utc


class AttemptService:
    """Attempt lookup and the start/resume transition"""

    @staticmethod
    def get_test(test_id):
        """Load a test or raise TestNotFoundError"""
        test = db.session.get(Test, test_id)
        if test is None:
            raise TestNotFoundError()
        return test

    @staticmethod
    def find_in_progress(test_id, user_id):
        return TestAttempt.query.filter_by(
            test_id=test_id,
            user_id=user_id,
            completed_at=None
        ).first()

    @staticmethod
    def find_owned(attempt_id, test_id, user_id):
        """Attempt by id, only if it belongs to this user and test"""
        return TestAttempt.query.filter_by(
            id=attempt_id,
            test_id=test_id,
            user_id=user_id
        ).first()

    @staticmethod
    def resolve(test_id, user_id, attempt_id=None):
        """
        Resolve the attempt a request refers to

        An explicit attempt_id owned by the user for this test wins, even if
        it is completed (callers decide what that means). Otherwise fall back
        to the in-progress attempt, or None.
        """
        if attempt_id is not None:
            attempt = AttemptService.find_owned(attempt_id, test_id, user_id)
            if attempt is not None:
                return attempt
            current_app.logger.debug(
                "Attempt %s not owned by user %s for test %s, falling back",
                attempt_id, user_id, test_id
            )
        return AttemptService.find_in_progress(test_id, user_id)

    @staticmethod
    def start_or_resume_attempt(test_id, user_id):
        """
        Start a new attempt or resume the in-progress one

        Returns:
            dict: attempt, resumed flag and the test (questions in creation order)
        """
        test = AttemptService.get_test(test_id)

        existing = AttemptService.find_in_progress(test_id, user_id)
        if existing is not None:
            current_app.logger.info(
                "Resuming attempt %s for user %s on test %s", existing.id, user_id, test_id
            )
            return {'attempt': existing, 'resumed': True, 'test': test}

        attempt = TestAttempt(test_id=test_id, user_id=user_id, started_at=now_utc())
        db.session.add(attempt)
        try:
            db.session.commit()
        except IntegrityError:
            # A concurrent start created the in-progress row first
            db.session.rollback()
            existing = AttemptService.find_in_progress(test_id, user_id)
            if existing is None:
                raise
            current_app.logger.info(
                "Concurrent start for user %s on test %s, resuming attempt %s",
                user_id, test_id, existing.id
            )
            return {'attempt': existing, 'resumed': True, 'test': existing.test}

        current_app.logger.info(
            "Started attempt %s for user %s on test %s", attempt.id, user_id, test_id
        )
        return {'attempt': attempt, 'resumed': False, 'test': test}
