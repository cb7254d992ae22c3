"""The browser capabilities the engine relies on.

``Driver`` is the whole surface the rest of the package touches.
``PlaywrightDriver`` implements it on top of a sync Playwright ``Page``
with element handles, which go stale on re-render the same way the
engine's note handles do.
"""

import functools
import logging
import time
from typing import Any, List, Optional, Protocol

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import ElementHandle, Page

from .errors import StaleElementError
from .locators import Query

logger = logging.getLogger(__name__)

_STALE_MARKERS = ("not attached", "Element is detached", "has been disposed", "is disposed")


class Driver(Protocol):
    def find_all(self, query: Query) -> List[Any]: ...

    def find_one(self, scope: Optional[Any], query: Query) -> Optional[Any]: ...

    def click(self, ref: Any) -> None: ...

    def type_text(self, ref: Any, text: str) -> None: ...

    def press(self, ref: Any, key: str) -> None: ...

    def clear(self, ref: Any) -> None: ...

    def get_attribute(self, ref: Any, name: str) -> Optional[str]: ...

    def is_visible(self, ref: Any) -> bool: ...

    def is_attached(self, ref: Any) -> bool: ...

    def ready_state(self) -> str: ...

    def now(self) -> float: ...

    def pause(self, seconds: float) -> None: ...


def _element_op(method):
    @functools.wraps(method)
    def wrapper(self, ref, *args):
        try:
            return method(self, ref, *args)
        except PlaywrightError as e:
            if any(marker in str(e) for marker in _STALE_MARKERS):
                raise StaleElementError(str(e)) from e
            raise
    return wrapper


def _selector(query: Query) -> str:
    return f"xpath={query.xpath}"


class PlaywrightDriver:
    def __init__(self, page: Page):
        self.page = page

    def find_all(self, query: Query) -> List[ElementHandle]:
        found = self.page.query_selector_all(_selector(query))
        logger.debug("%s -> %d match(es)", query, len(found))
        return found

    def find_one(self, scope: Optional[ElementHandle], query: Query) -> Optional[ElementHandle]:
        if scope is None:
            return self.page.query_selector(_selector(query))
        return self._scoped(scope, query)

    @_element_op
    def _scoped(self, scope, query):
        return scope.query_selector(_selector(query))

    @_element_op
    def click(self, ref):
        ref.click()

    @_element_op
    def type_text(self, ref, text):
        ref.type(text)

    @_element_op
    def press(self, ref, key):
        ref.press(key)

    @_element_op
    def clear(self, ref):
        ref.fill("")

    @_element_op
    def get_attribute(self, ref, name):
        return ref.get_attribute(name)

    @_element_op
    def is_visible(self, ref):
        return ref.is_visible()

    def is_attached(self, ref):
        try:
            return self._connected(ref)
        except StaleElementError:
            return False

    @_element_op
    def _connected(self, ref):
        return ref.evaluate("e => e.isConnected")

    def ready_state(self) -> str:
        return self.page.evaluate("document.readyState")

    def now(self) -> float:
        return time.monotonic()

    def pause(self, seconds: float) -> None:
        # Lets Playwright keep dispatching events while we wait.
        self.page.wait_for_timeout(seconds * 1000)
