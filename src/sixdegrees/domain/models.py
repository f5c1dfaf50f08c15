"""Graph entities — people, media items, and their mirrored links.

A connection between a person and a media item is stored twice: as a
``MediaLink`` in ``Person.media_links`` and as a ``PersonLink`` in
``Media.person_links``. Each link carries a denormalized copy of the
peer's display fields so traversals never need a second lookup to
render a node. The store owns the invariant that both halves exist
together (see ``GraphStore.add_connection``).
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from sixdegrees.domain.types import MediaKind


class MediaLink(BaseModel):
    """Person-side half of a connection: the media item and the person's role in it."""

    model_config = {"frozen": True}

    media_id: str
    media_name: str
    media_kind: MediaKind = MediaKind.UNKNOWN
    role: str = ""
    year: int | None = None
    image_url: str | None = None


class PersonLink(BaseModel):
    """Media-side half of a connection: the credited person and their role."""

    model_config = {"frozen": True}

    person_id: str
    person_name: str
    role: str = ""
    image_url: str | None = None


class Person(BaseModel):
    """A person node. ``media_links`` is keyed by media id."""

    id: str
    name: str
    image_url: str | None = None
    media_links: dict[str, MediaLink] = Field(default_factory=dict)


class Media(BaseModel):
    """A media node. ``person_links`` is keyed by person id."""

    id: str
    name: str
    kind: MediaKind = MediaKind.UNKNOWN
    year: int | None = None
    image_url: str | None = None
    person_links: dict[str, PersonLink] = Field(default_factory=dict)


class GraphSnapshot(BaseModel):
    """On-disk snapshot of the whole graph.

    There is no schema version field; shape compatibility is implicit and
    an artifact that fails validation is simply rebuilt.
    """

    build_timestamp: datetime
    people: list[Person] | None = None
    media: list[Media] | None = None
