"""
Models Package
Exports all database models
"""
from mentortests.models.user import User
from mentortests.models.classroom import Classroom, Subject
from mentortests.models.test import Test
from mentortests.models.question import TestQuestion
from mentortests.models.attempt import TestAttempt
from mentortests.models.submission import TestSubmission

__all__ = ['User', 'Classroom', 'Subject', 'Test', 'TestQuestion', 'TestAttempt', 'TestSubmission']
