"""Outcome types returned by every network-backed operation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T
    ok = True
    kind = "ok"


@dataclass(frozen=True)
class TransportError:
    """No response was obtained (connection failure, timeout)."""

    reason: str
    ok = False
    kind = "transport_error"


@dataclass(frozen=True)
class HttpStatusError:
    code: int
    ok = False
    kind = "http_status_error"


@dataclass(frozen=True)
class ApiStatusError:
    """Well-formed response whose ``status`` is not ``OK``."""

    status: str
    error_message: Optional[str] = None
    ok = False
    kind = "api_status_error"


@dataclass(frozen=True)
class ParseError:
    reason: str
    ok = False
    kind = "parse_error"


Failure = Union[TransportError, HttpStatusError, ApiStatusError, ParseError]
ApiResult = Union[Ok[T], TransportError, HttpStatusError, ApiStatusError, ParseError]

ZERO_RESULTS = "ZERO_RESULTS"


def is_zero_results(outcome) -> bool:
    """A well-formed search that matched nothing."""
    return isinstance(outcome, ApiStatusError) and outcome.status == ZERO_RESULTS
