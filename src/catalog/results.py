"""
Result type returned by every repository accessor.

Read accessors never raise into the web layer. Instead they report what
happened, so callers can tell "no matching rows" apart from "catalog
unreachable" and decide their own fallback.

Usage:
    result = await repository.fetch_by_slug("classic-round-neck-tee")
    if result.ok:
        product = result.data
    elif result.status is FetchStatus.NOT_FOUND:
        ...
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar


T = TypeVar("T")


class FetchStatus(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    ERROR = "error"
    DEGRADED = "degraded"  # served fallback data after an error


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Outcome of one catalog read."""
    status: FetchStatus
    data: Optional[T] = None
    error: Optional[str] = None
    error_type: Optional[str] = None
    meta: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def success(cls, data: T) -> "FetchResult[T]":
        return cls(status=FetchStatus.OK, data=data)

    @classmethod
    def not_found(cls, **meta: Any) -> "FetchResult[T]":
        return cls(status=FetchStatus.NOT_FOUND, meta=meta)

    @classmethod
    def failure(cls, error: BaseException, data: Optional[T] = None) -> "FetchResult[T]":
        return cls(
            status=FetchStatus.ERROR,
            data=data,
            error=str(error),
            error_type=type(error).__name__,
        )

    @classmethod
    def degraded(cls, data: T, failed: "FetchResult[Any]") -> "FetchResult[T]":
        """Fallback data standing in for a failed read; keeps the original error."""
        return cls(
            status=FetchStatus.DEGRADED,
            data=data,
            error=failed.error,
            error_type=failed.error_type,
        )

    @property
    def ok(self) -> bool:
        return self.status is FetchStatus.OK

    @property
    def is_degraded(self) -> bool:
        return self.status is FetchStatus.DEGRADED

    @property
    def is_error(self) -> bool:
        return self.status is FetchStatus.ERROR

    @property
    def items(self) -> List[Any]:
        """List payload, or an empty list when there is none."""
        if isinstance(self.data, list):
            return self.data
        return []
