"""Field reading for index-page list items.

A field is read by trying strategies in order; the first non-empty value
wins. ``ElementFields`` is the Playwright-backed reader; anything with the
same ``read`` coroutine can stand in for it.
"""

from dataclasses import dataclass
from typing import Any, Optional, Sequence

_READ_PROPERTY_JS = "(el, prop) => el[prop]"


@dataclass(frozen=True)
class FieldStrategy:
    """Read DOM property ``prop`` of the first element matching ``selector``."""
    selector: str
    prop: str = "innerText"


class ItemFields:
    """Reads fields from a single list item."""

    async def read(self, strategy: FieldStrategy) -> Optional[str]:
        raise NotImplementedError

    async def first(self, strategies: Sequence[FieldStrategy]) -> Optional[str]:
        for strategy in strategies:
            value = await self.read(strategy)
            if value and value.strip():
                return value.strip()
        return None


class ElementFields(ItemFields):
    def __init__(self, handle: Any):
        self._handle = handle

    async def read(self, strategy: FieldStrategy) -> Optional[str]:
        element = await self._handle.query_selector(strategy.selector)
        if element is None:
            return None
        value = await element.evaluate(_READ_PROPERTY_JS, strategy.prop)
        return value if isinstance(value, str) else None
