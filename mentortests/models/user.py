"""
User Model
Mentors and students
"""
from mentortests.extensions import db

ROLES = ('mentor', 'student')


class User(db.Model):
    """User model"""
    __tablename__ = 'user'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(20), nullable=False, default='student')

    # Students are filed under a class by name
    classname = db.Column(db.String(100))

    def __repr__(self):
        return f'<User {self.email} ({self.role})>'

    @property
    def is_mentor(self):
        return self.role == 'mentor'

    def to_summary(self):
        return {'id': self.id, 'name': self.name, 'email': self.email}

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'role': self.role,
            'classname': self.classname,
        }
