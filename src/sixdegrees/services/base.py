"""BaseService — shared foundation for the graph services.

Every service receives the :class:`GraphStore` it operates on at
construction time. There is no process-wide accessor: the composition
root builds one store and hands it to each service that needs it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sixdegrees.infrastructure.graph.store import GraphStore


class BaseService:
    """Base for service-layer classes.

    Usage::

        store = GraphStore()
        paths = PathfindingService(store)
        result = paths.find_shortest_path("p1", "p4")
    """

    def __init__(self, store: GraphStore) -> None:
        if store is None:
            raise TypeError(f"{type(self).__name__} requires a GraphStore")
        self._store = store

    @property
    def store(self) -> GraphStore:
        return self._store
