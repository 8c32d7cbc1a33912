"""
Services Package
"""
from mentortests.services.attempt_service import AttemptService
from mentortests.services.submission_service import SubmissionService
from mentortests.services.completion_service import CompletionService
from mentortests.services.notification_service import NotificationService
from mentortests.services.scoring_service import ScoringService
from mentortests.services.catalog_service import CatalogService
from mentortests.services.review_service import ReviewService

__all__ = [
    'AttemptService',
    'SubmissionService',
    'CompletionService',
    'NotificationService',
    'ScoringService',
    'CatalogService',
    'ReviewService',
]
