"""
Test Model
A mentor-authored test; immutable after creation except for delete
"""
from mentortests.extensions import db
from mentortests.utils.helpers import now_utc


class Test(db.Model):
    """Test model"""
    __tablename__ = 'test'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, default='')
    mentor_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False, index=True)
    class_id = db.Column(db.Integer, db.ForeignKey('classroom.id'), nullable=False, index=True)
    subject_id = db.Column(db.Integer, db.ForeignKey('subject.id'), nullable=False)
    created_at = db.Column(db.DateTime, default=now_utc)

    # Relationships
    owner = db.relationship('User', lazy=True)
    classroom = db.relationship('Classroom', lazy=True)
    subject = db.relationship('Subject', lazy=True)
    questions = db.relationship(
        'TestQuestion', backref='test', lazy=True,
        order_by='TestQuestion.order',
        cascade='all, delete-orphan'
    )
    attempts = db.relationship(
        'TestAttempt', backref='test', lazy=True,
        cascade='all, delete-orphan'
    )

    def __repr__(self):
        return f'<Test {self.title}>'

    def owned_by(self, user_id):
        return self.mentor_id == user_id

    def to_dict(self, with_questions=True):
        data = {
            'id': self.id,
            'title': self.title,
            'description': self.description or '',
        }
        if with_questions:
            data['questions'] = [q.to_dict() for q in self.questions]
        return data
