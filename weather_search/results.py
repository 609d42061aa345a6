"""
Outcome of an asynchronous lookup.

A lookup either succeeds with a value or fails with an opaque error.
The search core only ever distinguishes the two cases.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True)
class Failure:
    error: Exception


Result = Union[Success[T], Failure]
