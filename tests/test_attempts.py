"""
Tests for starting and resuming test attempts.
"""
import pytest
from sqlalchemy.exc import IntegrityError

from mentortests import models
from mentortests import errors
from mentortests.extensions import db
from mentortests.services import AttemptService, CompletionService


def in_progress_count(test_id, user_id):
    return models.TestAttempt.query.filter_by(
        test_id=test_id, user_id=user_id, completed_at=None
    ).count()


class TestStartOrResume:

    def test_first_start_creates_attempt(self, sample_test, student):
        result = AttemptService.start_or_resume_attempt(sample_test.id, student.id)

        assert result['resumed'] is False
        attempt = result['attempt']
        assert attempt.test_id == sample_test.id
        assert attempt.user_id == student.id
        assert attempt.started_at is not None
        assert attempt.completed_at is None
        assert attempt.score is None

    def test_second_start_resumes_same_attempt(self, sample_test, student):
        first = AttemptService.start_or_resume_attempt(sample_test.id, student.id)
        second = AttemptService.start_or_resume_attempt(sample_test.id, student.id)

        assert second['resumed'] is True
        assert second['attempt'].id == first['attempt'].id
        assert models.TestAttempt.query.count() == 1

    def test_returns_all_questions_in_creation_order(self, sample_test, student):
        result = AttemptService.start_or_resume_attempt(sample_test.id, student.id)
        questions = result['test'].to_dict()['questions']

        assert [q['question'] for q in questions] == [
            'Solve x + 2 = 4',
            'Solve 2x = 10',
            'Explain what a variable is',
        ]

    def test_unknown_test(self, student):
        with pytest.raises(errors.TestNotFoundError):
            AttemptService.start_or_resume_attempt(999, student.id)

    def test_users_get_separate_attempts(self, sample_test, student, other_student):
        mine = AttemptService.start_or_resume_attempt(sample_test.id, student.id)
        theirs = AttemptService.start_or_resume_attempt(sample_test.id, other_student.id)

        assert mine['attempt'].id != theirs['attempt'].id
        assert theirs['resumed'] is False

    def test_start_after_completion_opens_new_attempt(self, sample_test, student):
        first = AttemptService.start_or_resume_attempt(sample_test.id, student.id)
        CompletionService.finish_attempt(sample_test.id, student.id, first['attempt'].id)

        again = AttemptService.start_or_resume_attempt(sample_test.id, student.id)

        assert again['resumed'] is False
        assert again['attempt'].id != first['attempt'].id
        assert in_progress_count(sample_test.id, student.id) == 1


class TestInProgressUniqueness:

    def test_many_starts_leave_one_in_progress(self, sample_test, student):
        for _ in range(5):
            AttemptService.start_or_resume_attempt(sample_test.id, student.id)

        assert in_progress_count(sample_test.id, student.id) == 1

    def test_storage_rejects_second_in_progress_row(self, sample_test, student):
        AttemptService.start_or_resume_attempt(sample_test.id, student.id)

        db.session.add(models.TestAttempt(test_id=sample_test.id, user_id=student.id))
        with pytest.raises(IntegrityError):
            db.session.commit()
        db.session.rollback()

    def test_lost_race_resumes_winner(self, sample_test, student, monkeypatch):
        winner = AttemptService.start_or_resume_attempt(sample_test.id, student.id)['attempt']
        winner_id = winner.id

        # The losing request read before the winner committed
        original = AttemptService.find_in_progress
        calls = []

        def stale_lookup(test_id, user_id):
            calls.append(1)
            if len(calls) == 1:
                return None
            return original(test_id, user_id)

        monkeypatch.setattr(AttemptService, 'find_in_progress', staticmethod(stale_lookup))

        result = AttemptService.start_or_resume_attempt(sample_test.id, student.id)

        assert result['resumed'] is True
        assert result['attempt'].id == winner_id
        assert in_progress_count(sample_test.id, student.id) == 1


class TestStartRoute:

    def test_start_and_resume(self, login, sample_test, student):
        client = login(student)

        response = client.post('/student/start-test', json={'testId': sample_test.id})
        assert response.status_code == 200
        data = response.get_json()
        assert data['success'] is True
        assert data['resumed'] is False
        assert data['message'] == 'Test attempt started'
        assert len(data['test']['questions']) == 3

        again = client.post('/student/start-test', json={'testId': sample_test.id}).get_json()
        assert again['attemptId'] == data['attemptId']
        assert again['resumed'] is True
        assert again['message'] == 'Continuing existing test attempt'

    def test_missing_test_is_404(self, login, student):
        response = login(student).post('/student/start-test', json={'testId': 404})

        assert response.status_code == 404
        assert response.get_json() == {'success': False, 'message': 'Test not found'}

    def test_missing_test_id_is_400(self, login, student):
        response = login(student).post('/student/start-test', json={})

        assert response.status_code == 400
        assert response.get_json()['success'] is False

    def test_requires_login(self, client, sample_test):
        response = client.post('/student/start-test', json={'testId': sample_test.id})

        assert response.status_code == 401
