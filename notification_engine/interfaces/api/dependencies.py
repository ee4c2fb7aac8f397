"""FastAPI dependency utilities."""

from notification_engine.domain.catalog import DEFAULT_EVENT_CATALOG, EventCatalog


def get_event_catalog() -> EventCatalog:
    """Return the catalog used by the dispatch endpoints.

    Override this dependency to serve a different registry.
    """

    return DEFAULT_EVENT_CATALOG
