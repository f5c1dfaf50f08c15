"""NetworkX projection of the bipartite store.

Person and media ids are independent namespaces, so projected node keys
are prefixed (``person:<id>``, ``media:<id>``). The projection is a
point-in-time copy; later store mutations are not reflected.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeAlias

import networkx as nx

from sixdegrees.domain.types import NodeType

if TYPE_CHECKING:
    from sixdegrees.infrastructure.graph.store import GraphStore

_Graph: TypeAlias = nx.Graph


def node_key(node_type: NodeType, node_id: str) -> str:
    return f"{node_type}:{node_id}"


def to_networkx(store: GraphStore) -> _Graph:
    """Build an undirected bipartite graph from every person's media links.

    Nodes carry ``id``, ``name``, ``type``, ``bipartite`` (0 people,
    1 media) and, for media, ``media_kind`` and ``year``. Edges carry
    ``role``. Media nobody is credited on are not reachable and are left out.
    """
    g: _Graph = nx.Graph()
    for person in store.iter_people():
        g.add_node(
            node_key(NodeType.PERSON, person.id),
            id=person.id,
            name=person.name,
            type=str(NodeType.PERSON),
            bipartite=0,
        )
        for link in store.get_person_links(person.id):
            media_key = node_key(NodeType.MEDIA, link.media_id)
            if media_key not in g:
                g.add_node(
                    media_key,
                    id=link.media_id,
                    name=link.media_name,
                    type=str(NodeType.MEDIA),
                    media_kind=str(link.media_kind),
                    year=link.year,
                    bipartite=1,
                )
            g.add_edge(node_key(NodeType.PERSON, person.id), media_key, role=link.role)
    return g
