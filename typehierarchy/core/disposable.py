from typing import Callable, Optional


class Disposable:
    """Wraps a release callback that runs at most once"""

    def __init__(self, on_dispose: Optional[Callable[[], None]] = None):
        self._on_dispose = on_dispose
        self.disposed = False

    def dispose(self) -> None:
        if self.disposed:
            return
        self.disposed = True
        if self._on_dispose:
            self._on_dispose()
