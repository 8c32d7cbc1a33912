"""
Routes Package
Exports all route blueprints
"""
from mentortests.routes.auth import auth_bp
from mentortests.routes.mentor import mentor_bp
from mentortests.routes.student import student_bp

__all__ = ['auth_bp', 'mentor_bp', 'student_bp']
