"""
Utils Package
"""
from mentortests.utils.helpers import (
    now_utc,
    isoformat,
    get_current_user,
    parse_body,
    require_login,
    require_mentor,
    require_student
)

__all__ = [
    'now_utc',
    'isoformat',
    'get_current_user',
    'parse_body',
    'require_login',
    'require_mentor',
    'require_student'
]
