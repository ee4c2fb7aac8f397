"""Registry of the event keys raised across the product."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType


class EventCatalog(Mapping[str, str]):
    """Immutable mapping of symbolic event names to stable event keys.

    Instances are passed to the dispatch entry points rather than read from a
    module global, so tests and alternative deployments can supply their own.
    """

    def __init__(self, entries: Mapping[str, str]) -> None:
        keys: dict[str, str] = {}
        for name, key in entries.items():
            normalized = (key or "").strip()
            if not normalized:
                raise ValueError(f"Event '{name}' must map to a non-empty key")
            keys[name] = normalized
        self._entries = MappingProxyType(keys)
        self._names_by_key = MappingProxyType({key: name for name, key in keys.items()})

    def __getitem__(self, name: str) -> str:
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def key(self, name: str) -> str:
        """Return the event key registered under ``name``."""

        try:
            return self._entries[name]
        except KeyError as exc:
            raise KeyError(f"Unknown notification event '{name}'") from exc

    def name_for(self, key: str) -> str | None:
        """Return the symbolic name for ``key`` or ``None`` when unregistered."""

        return self._names_by_key.get(key)

    def is_known(self, key: str) -> bool:
        return key in self._names_by_key

    def event_keys(self) -> tuple[str, ...]:
        return tuple(self._entries.values())


DEFAULT_EVENT_CATALOG = EventCatalog(
    {
        "MOCK_SUBMITTED": "mock_submitted",
        "MOCK_RESULT_READY": "mock_result_ready",
        "MOCK_COMPLETED_LISTENING": "mock_completed_listening",
        "STREAK_WARNING": "streak_warning",
        "PLAN_UPGRADED": "plan_upgraded",
        "NEW_MOCK_UNLOCKED": "new_mock_unlocked",
        "NUDGE": "nudge",
        "NUDGE_MANUAL": "nudge_manual",
    }
)


__all__ = ["EventCatalog", "DEFAULT_EVENT_CATALOG"]
