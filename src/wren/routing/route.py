"""RouteMatch result type."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from wren._internal.types import Handler


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Outcome of a trie lookup.

    ``handler`` is ``None`` when nothing matched. That is an expected
    outcome, not an error: the dispatcher turns it into a 404.
    """

    handler: Handler | None
    params: Mapping[str, str] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return self.handler is not None


NO_MATCH = RouteMatch(handler=None, params=MappingProxyType({}))
