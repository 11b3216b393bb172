"""Result values returned by every LinxPay API operation.

Callers branch on the result type (or ``result.ok``) instead of catching
exceptions for ordinary API outcomes such as a declined card.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Success:
    """The endpoint answered 2xx; ``body`` is the parsed JSON (None if empty)."""

    body: Any
    status_code: int = 200

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class ApiError:
    """The endpoint answered 4xx; ``body`` is the parsed JSON error verbatim.

    ``body`` is None when the error response was not JSON.
    """

    body: Any
    status_code: int

    @property
    def ok(self) -> bool:
        return False


@dataclass(frozen=True)
class TransportError:
    """The call failed outside the API contract.

    Covers unreachable hosts, timeouts, 5xx responses and success responses
    whose body is not JSON.
    """

    reason: str
    status_code: int | None = None

    @property
    def ok(self) -> bool:
        return False


ApiResult = Union[Success, ApiError, TransportError]
