# medicare/services/resource.py
import logging
from typing import Callable, Generic, Optional, TypeVar

from medicare.services.api import RequestFailed

log = logging.getLogger(__name__)

T = TypeVar("T")

IDLE = "idle"
LOADING = "loading"
SUCCESS = "success"
ERROR = "error"


class Resource(Generic[T]):
    """
    Loading/error/data holder for one remote fetch.

    status moves idle -> loading -> success | error and may be re-entered from
    either settled state. data always holds the last successful result, so a
    failed load leaves it visible next to the error message.

    Each begin() issues a new generation token; results carrying an older
    token are dropped, so the latest request wins regardless of arrival order.
    """

    def __init__(self, fetch: Callable[..., T], name: str = "resource"):
        self.fetch = fetch
        self.name = name
        self.status = IDLE
        self.data: Optional[T] = None
        self.error = ""
        self._generation = 0

    @property
    def loading(self) -> bool:
        return self.status == LOADING

    def begin(self) -> int:
        self._generation += 1
        self.status = LOADING
        self.error = ""
        return self._generation

    def is_current(self, token: int) -> bool:
        return token == self._generation

    def succeed(self, token: int, data: T) -> bool:
        if not self.is_current(token):
            log.debug("Dropping stale %s result (token %s, current %s)", self.name, token, self._generation)
            return False
        self.data = data
        self.status = SUCCESS
        return True

    def fail(self, token: int, message: str) -> bool:
        if not self.is_current(token):
            log.debug("Dropping stale %s error (token %s, current %s)", self.name, token, self._generation)
            return False
        self.error = message
        self.status = ERROR
        return True

    def load(self, *args) -> bool:
        """Run fetch(*args) and apply its outcome. Returns True when new data was applied."""
        token = self.begin()
        try:
            data = self.fetch(*args)
        except RequestFailed as e:
            self.fail(token, str(e))
            return False
        return self.succeed(token, data)
