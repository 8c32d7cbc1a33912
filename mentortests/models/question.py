"""
TestQuestion Model
Free-text questions; the set is fixed once the test is created
"""
from mentortests.extensions import db


class TestQuestion(db.Model):
    """Question model"""
    __tablename__ = 'test_question'

    id = db.Column(db.Integer, primary_key=True)
    test_id = db.Column(db.Integer, db.ForeignKey('test.id'), nullable=False, index=True)
    order = db.Column(db.Integer, default=0)
    question = db.Column(db.Text, nullable=False)

    def __repr__(self):
        return f'<TestQuestion {self.id}: {self.question[:50]}...>'

    def to_dict(self):
        return {'id': self.id, 'question': self.question}
