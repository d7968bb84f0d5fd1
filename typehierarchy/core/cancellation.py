import logging
from typing import Callable, List

from typehierarchy.core.disposable import Disposable

logger = logging.getLogger(__name__)


class CancellationToken:
    """Read side of a cancellation signal handed to providers"""

    def __init__(self):
        self._cancelled = False
        self._listeners: List[Callable[[], None]] = []

    @property
    def is_cancellation_requested(self) -> bool:
        return self._cancelled

    def on_cancellation_requested(self, listener: Callable[[], None]) -> Disposable:
        """Registers a listener fired once on cancellation.

        A listener added after cancellation is called immediately.
        """
        if self._cancelled:
            listener()
            return Disposable()
        self._listeners.append(listener)
        return Disposable(lambda: self._remove_listener(listener))

    def _remove_listener(self, listener: Callable[[], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        listeners, self._listeners = self._listeners, []
        for listener in listeners:
            try:
                listener()
            except Exception as e:
                logger.error("Cancellation listener failed: %s", e, exc_info=True)


class _NoneCancellationToken(CancellationToken):
    """A token that is never cancelled and has no way to be"""

    def on_cancellation_requested(self, listener: Callable[[], None]) -> Disposable:
        return Disposable()

    def _cancel(self) -> None:
        pass


# Used by the host command path, which has nothing to cancel with
NONE_CANCELLATION_TOKEN = _NoneCancellationToken()


class CancellationTokenSource:
    """Write side of a cancellation signal, for callers that can cancel"""

    def __init__(self):
        self.token = CancellationToken()

    def cancel(self) -> None:
        self.token._cancel()

    def dispose(self) -> None:
        self.token._listeners.clear()
