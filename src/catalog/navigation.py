"""
Generation counter for navigation-scoped fetches.

A shopper can change category faster than the catalog answers. Each
navigation takes a token; when a fetch completes, its result is only
applied if its token is still the current one. Late answers for a
superseded navigation are dropped instead of overwriting newer state.

Usage:
    tracker = NavigationTracker()

    token = tracker.begin("men")
    result = await repository.fetch_by_category("mens-t-shirts")
    if tracker.is_current(token):
        show(result)
"""

import threading
from dataclasses import dataclass
from typing import Any, Awaitable, Optional, Tuple, TypeVar


T = TypeVar("T")


@dataclass(frozen=True)
class NavigationToken:
    generation: int
    context: Tuple[Any, ...] = ()


class NavigationTracker:
    """Thread-safe monotonically increasing navigation counter."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def begin(self, *context: Any) -> NavigationToken:
        """Start a navigation; every earlier token becomes stale."""
        with self._lock:
            self._generation += 1
            return NavigationToken(self._generation, tuple(context))

    def is_current(self, token: NavigationToken) -> bool:
        return token.generation == self._generation

    async def guard(self, token: NavigationToken, pending: Awaitable[T]) -> Optional[T]:
        """Await `pending`, returning None if the navigation was superseded meanwhile."""
        value = await pending
        if not self.is_current(token):
            return None
        return value
