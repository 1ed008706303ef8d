# File: app/services/results.py

"""
Outcome values returned by the store adapter.

Store operations never raise for database problems. Callers check which of
``Ok``, ``NotFound``, ``Conflict`` or ``StoreFailure`` they got back.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class NotFound:
    message: str = "Not found"


@dataclass(frozen=True)
class Conflict:
    message: str


@dataclass(frozen=True)
class StoreFailure:
    message: str


StoreResult = Union[Ok[T], NotFound, Conflict, StoreFailure]
