"""
Mentor Routes
Test authoring, submissions review and scoring
"""
from flask import Blueprint, request, jsonify, g

from mentortests.schemas import CreateTestRequest, ScoreRequest
from mentortests.services import CatalogService, ReviewService, ScoringService
from mentortests.errors import InvalidInputError
from mentortests.utils import parse_body, require_mentor, require_login

mentor_bp = Blueprint('mentor', __name__)


@mentor_bp.route('/create-test', methods=['POST'])
@require_mentor
def create_test():
    """Create a test with its questions"""
    data = parse_body(CreateTestRequest)
    test = CatalogService.create_test(g.user.id, data)

    return jsonify({
        'success': True,
        'message': 'Test created successfully',
        'data': {
            'id': test.id,
            'title': test.title,
            'className': test.classroom.name,
            'subjectName': test.subject.name,
            'questionCount': len(test.questions),
        }
    }), 201


@mentor_bp.route('/get-test')
@require_mentor
def get_tests():
    """All tests created by the current mentor"""
    return jsonify({
        'success': True,
        'message': CatalogService.list_mentor_tests(g.user.id),
    })


@mentor_bp.route('/delete-test', methods=['DELETE'])
@require_mentor
def delete_test():
    """Delete a test owned by the current mentor"""
    test_id = request.args.get('id', type=int)
    if test_id is None:
        raise InvalidInputError('Test ID is required.')

    CatalogService.delete_test(test_id, g.user.id)
    return jsonify({'success': True, 'message': 'Test deleted successfully'})


@mentor_bp.route('/get-sub/<int:test_id>')
@require_mentor
def get_submissions(test_id):
    """All attempts for one of the mentor's tests"""
    attempts, test = ReviewService.list_test_attempts(test_id, g.user.id)
    return jsonify({'success': True, 'message': attempts, 'test': test})


@mentor_bp.route('/get-sub-details/<int:attempt_id>')
@require_login
def get_submission_details(attempt_id):
    """Answers of one attempt - owning mentor or the student themself"""
    submissions, attempt_info = ReviewService.get_attempt_details(attempt_id, g.user)
    return jsonify({'success': True, 'message': submissions, 'attemptInfo': attempt_info})


@mentor_bp.route('/score', methods=['POST'])
@require_mentor
def score():
    """Score a completed attempt"""
    data = parse_body(ScoreRequest)
    attempt = ScoringService.score_attempt(data.attempt_id, data.score, g.user.id)

    return jsonify({
        'success': True,
        'message': 'Score submitted successfully',
        'data': dict(
            attempt.to_dict(),
            attemptId=attempt.id,
            test={'id': attempt.test.id, 'title': attempt.test.title},
            user=attempt.user.to_summary(),
        )
    })
