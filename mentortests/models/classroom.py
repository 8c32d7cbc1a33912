"""
Classroom and Subject Models
Tests are filed under a class and a subject within it
"""
from mentortests.extensions import db


class Classroom(db.Model):
    """Class model"""
    __tablename__ = 'classroom'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), unique=True, nullable=False)

    subjects = db.relationship('Subject', backref='classroom', lazy=True)

    def __repr__(self):
        return f'<Classroom {self.name}>'

    def to_dict(self):
        return {'id': self.id, 'name': self.name}


class Subject(db.Model):
    """Subject model"""
    __tablename__ = 'subject'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    class_id = db.Column(db.Integer, db.ForeignKey('classroom.id'), nullable=False, index=True)

    __table_args__ = (
        db.UniqueConstraint('name', 'class_id', name='unique_subject_per_class'),
    )

    def __repr__(self):
        return f'<Subject {self.name}>'

    def to_dict(self):
        return {'id': self.id, 'name': self.name}
