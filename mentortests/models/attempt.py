"""
TestAttempt Model
One student's attempt at a test: in progress until completed_at is set
"""
from mentortests.extensions import db
from mentortests.utils.helpers import now_utc, isoformat

IN_PROGRESS = db.text('completed_at IS NULL')


class TestAttempt(db.Model):
    """Attempt model"""
    __tablename__ = 'test_attempt'

    id = db.Column(db.Integer, primary_key=True)
    test_id = db.Column(db.Integer, db.ForeignKey('test.id'), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False, index=True)
    started_at = db.Column(db.DateTime, default=now_utc, nullable=False)
    completed_at = db.Column(db.DateTime, nullable=True)
    score = db.Column(db.Integer, nullable=True)

    user = db.relationship('User', lazy=True)
    submissions = db.relationship(
        'TestSubmission', backref='attempt', lazy=True,
        order_by='TestSubmission.submitted_at',
        cascade='all, delete-orphan'
    )

    # At most one in-progress attempt per (test, user)
    __table_args__ = (
        db.Index(
            'unique_in_progress_attempt', 'test_id', 'user_id',
            unique=True,
            postgresql_where=IN_PROGRESS,
            sqlite_where=IN_PROGRESS,
        ),
    )

    def __repr__(self):
        state = 'completed' if self.completed_at else 'in progress'
        return f'<TestAttempt {self.id} test={self.test_id} user={self.user_id} {state}>'

    @property
    def is_completed(self):
        return self.completed_at is not None

    def to_dict(self):
        return {
            'id': self.id,
            'testId': self.test_id,
            'userId': self.user_id,
            'startedAt': isoformat(self.started_at),
            'completedAt': isoformat(self.completed_at),
            'score': self.score,
        }
