"""
Tag-invalidated cache for API reads.

Each cached entry is stored under a query key and remembers the tags it
provides, e.g. ``("Form", "<id>")`` or ``("Forms", "LIST")``. A mutation
invalidates tags; every entry providing one of them is dropped (never
patched) so the next read goes back to the server.
"""
from typing import Any, Callable, Dict, Hashable, Iterable, List, Set, Tuple

Tag = Tuple[str, str]
QueryKey = Tuple[Hashable, ...]

_MISSING = object()


class QueryCache:
    def __init__(self):
        self._entries: Dict[QueryKey, Any] = {}
        self._tags: Dict[QueryKey, Set[Tag]] = {}
        self._subscribers: List[Callable[[Set[Tag], List[QueryKey]], None]] = []

    def __contains__(self, key: QueryKey) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: QueryKey, default: Any = None) -> Any:
        return self._entries.get(key, default)

    def provide(self, key: QueryKey, value: Any, tags: Iterable[Tag]) -> Any:
        self._entries[key] = value
        self._tags[key] = set(tags)
        return value

    def fetch(self, key: QueryKey, tags: Iterable[Tag], loader: Callable[[], Any]) -> Any:
        """Return the cached value for ``key`` or load, store and return it."""
        value = self._entries.get(key, _MISSING)
        if value is _MISSING:
            value = self.provide(key, loader(), tags)
        return value

    def invalidate(self, tags: Iterable[Tag]) -> List[QueryKey]:
        tags = set(tags)
        dropped = [key for key, provided in self._tags.items() if provided & tags]
        for key in dropped:
            del self._entries[key]
            del self._tags[key]
        for callback in list(self._subscribers):
            callback(tags, dropped)
        return dropped

    def clear(self) -> None:
        self.invalidate({tag for provided in self._tags.values() for tag in provided})

    def subscribe(self, callback: Callable[[Set[Tag], List[QueryKey]], None]) -> Callable[[], None]:
        """Register ``callback(tags, dropped_keys)``; returns an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe
