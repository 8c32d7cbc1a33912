"""
Student Routes
Test attempt: start or resume, answer, finish, history
"""
from flask import Blueprint, jsonify, g

from mentortests.schemas import StartTestRequest, SubmitAnswerRequest, FinishTestRequest
from mentortests.services import (
    AttemptService, SubmissionService, CompletionService, CatalogService, ReviewService
)
from mentortests.utils import parse_body, require_login, require_student

student_bp = Blueprint('student', __name__)


@student_bp.route('/get-my-test')
@require_student
def get_my_tests():
    """Tests for the student's class with attempt status"""
    tests, class_info = CatalogService.list_class_tests(g.user)
    return jsonify({'success': True, 'message': tests, 'classInfo': class_info})


@student_bp.route('/get-questions/<int:test_id>')
@require_login
def get_questions(test_id):
    return jsonify({'success': True, 'message': CatalogService.get_questions(test_id)})


@student_bp.route('/start-test', methods=['POST'])
@require_login
def start_test():
    """Start a test attempt, or continue the one in progress"""
    data = parse_body(StartTestRequest)
    result = AttemptService.start_or_resume_attempt(data.test_id, g.user.id)

    return jsonify({
        'success': True,
        'message': 'Continuing existing test attempt' if result['resumed'] else 'Test attempt started',
        'attemptId': result['attempt'].id,
        'resumed': result['resumed'],
        'test': result['test'].to_dict(),
    })


@student_bp.route('/submit-answer', methods=['POST'])
@require_login
def submit_answer():
    """Save the answer to one question"""
    data = parse_body(SubmitAnswerRequest)
    result = SubmissionService.submit_answer(
        data.test_id,
        data.question_id,
        data.answer,
        g.user.id,
        attempt_id=data.attempt_id,
    )

    return jsonify({
        'success': True,
        'message': 'Answer updated successfully' if result['updated'] else 'Answer submitted successfully',
        'submission': result['submission'].to_dict(),
        'attemptId': result['attempt'].id,
        'updated': result['updated'],
    })


@student_bp.route('/finish-test', methods=['POST'])
@require_login
def finish_test():
    """Mark the attempt completed; repeat calls succeed"""
    data = parse_body(FinishTestRequest)
    result = CompletionService.finish_attempt(data.test_id, g.user.id, attempt_id=data.attempt_id)

    return jsonify({
        'success': True,
        'message': 'Test already completed' if result['already_completed'] else 'Test attempt completed successfully',
        'attempt': result['attempt'].to_dict(),
        'alreadyCompleted': result['already_completed'],
    })


@student_bp.route('/get-user-sub')
@require_login
def get_my_submissions():
    """The current user's attempts, newest first"""
    return jsonify({'success': True, 'message': ReviewService.list_my_attempts(g.user.id)})
