"""Change notification for entry writes."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

_logger = logging.getLogger(__name__)

RefreshListener = Callable[[int, str], None]


@dataclass
class RefreshNotifier:
    """Tracks a revision counter and tells listeners when entries change.

    Clients such as the watch or widgets poll the revision and re-fetch
    when it moves; in-process listeners are called synchronously.
    """

    revision: int = 0
    _listeners: list[RefreshListener] = field(default_factory=list)

    def subscribe(self, listener: RefreshListener) -> Callable[[], None]:
        """Register a listener and return a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def notify(self, reason: str) -> int:
        """Bump the revision and call every listener."""
        self.revision += 1
        _logger.info("Entries changed: revision=%s reason=%s", self.revision, reason)
        for listener in list(self._listeners):
            try:
                listener(self.revision, reason)
            except Exception:
                _logger.exception("Refresh listener failed for %s", reason)
        return self.revision
