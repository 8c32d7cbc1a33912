"""
TestSubmission Model
Stores one answer per (attempt, question); updated in place on resubmission
"""
from mentortests.extensions import db
from mentortests.utils.helpers import now_utc, isoformat


class TestSubmission(db.Model):
    """Submission model"""
    __tablename__ = 'test_submission'

    id = db.Column(db.Integer, primary_key=True)
    attempt_id = db.Column(db.Integer, db.ForeignKey('test_attempt.id'), nullable=False, index=True)
    question_id = db.Column(db.Integer, db.ForeignKey('test_question.id'), nullable=False, index=True)
    answer = db.Column(db.Text, nullable=False, default='')
    submitted_at = db.Column(db.DateTime, default=now_utc)

    question = db.relationship('TestQuestion', lazy=True)

    __table_args__ = (
        db.UniqueConstraint(
            'attempt_id', 'question_id',
            name='unique_answer_per_question'
        ),
    )

    def __repr__(self):
        return f'<TestSubmission Q{self.question_id} in attempt {self.attempt_id}>'

    def to_dict(self, with_question=False):
        data = {
            'id': self.id,
            'attemptId': self.attempt_id,
            'questionId': self.question_id,
            'answer': self.answer,
            'submittedAt': isoformat(self.submitted_at),
        }
        if with_question and self.question is not None:
            data['question'] = self.question.to_dict()
        return data
