"""Utilities Package"""
from app.utils.errors import (
    TaskError,
    NotFoundError,
    NotAllowedError,
    TaskRequesterNotMatchError,
    ConcurrentUpdateError,
)
from app.utils.identifiers import canonical_id, same_id, contains_id, unique_ids

__all__ = [
    "TaskError",
    "NotFoundError",
    "NotAllowedError",
    "TaskRequesterNotMatchError",
    "ConcurrentUpdateError",
    "canonical_id",
    "same_id",
    "contains_id",
    "unique_ids",
]
