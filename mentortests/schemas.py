"""
Pydantic Schemas - Request Validation

Request bodies are validated here before they reach the services.
Field aliases match the camelCase JSON the clients send.
"""

import re
from typing import Optional, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mentortests.errors import InvalidScoreError

_LEADING_INT = re.compile(r'^\s*([+-]?\d+)')

# Bounds of the INTEGER score column
SCORE_MIN = -2 ** 31
SCORE_MAX = 2 ** 31 - 1


def _parse_score(value):
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value != value or value in (float('inf'), float('-inf')):
            return None
        return int(value)
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match:
            return int(match.group(1))
    return None


def coerce_score(value):
    """
    Lenient integer parse: ints pass, floats truncate, strings use their
    leading integer digits ("85", " 85pts", "85.9" -> 85). Anything else,
    or a number the score column cannot hold, raises InvalidScoreError.
    """
    score = _parse_score(value)
    if score is None:
        raise InvalidScoreError()
    if not SCORE_MIN <= score <= SCORE_MAX:
        raise InvalidScoreError(f"Score must be between {SCORE_MIN} and {SCORE_MAX}")
    return score


class RequestSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ============================================================
# AUTH SCHEMAS
# ============================================================

class RegisterRequest(RequestSchema):
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=6)
    role: str = Field(..., pattern=r'^(mentor|student)$')
    classname: Optional[str] = None


class LoginRequest(RequestSchema):
    email: str
    password: str


# ============================================================
# CATALOG SCHEMAS
# ============================================================

class QuestionIn(RequestSchema):
    question: str = Field(..., min_length=1)


class CreateTestRequest(RequestSchema):
    title: str = Field(..., min_length=1)
    description: str = ''
    classname: str = Field(..., min_length=1)
    subjectname: str = Field(..., min_length=1)
    questions: List[QuestionIn] = Field(default_factory=list)

    @field_validator('classname', 'subjectname', 'title')
    @classmethod
    def not_blank(cls, value):
        value = value.strip()
        if not value:
            raise ValueError('must not be blank')
        return value


# ============================================================
# ATTEMPT SCHEMAS
# ============================================================

class StartTestRequest(RequestSchema):
    test_id: int = Field(..., alias='testId')


class SubmitAnswerRequest(RequestSchema):
    test_id: int = Field(..., alias='testId')
    question_id: int = Field(..., alias='questionId')
    # Empty string is a valid answer; null/missing is not
    answer: str
    attempt_id: Optional[int] = Field(None, alias='attemptId')


class FinishTestRequest(RequestSchema):
    test_id: int = Field(..., alias='testId')
    attempt_id: Optional[int] = Field(None, alias='attemptId')


class ScoreRequest(RequestSchema):
    attempt_id: int = Field(..., alias='attemptId')
    score: int

    @field_validator('score', mode='before')
    @classmethod
    def lenient_score(cls, value):
        return coerce_score(value)
