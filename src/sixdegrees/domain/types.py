"""Node and media classification enums."""

from __future__ import annotations

from enum import StrEnum


class NodeType(StrEnum):
    """The two entity kinds of the bipartite graph."""

    PERSON = "person"
    MEDIA = "media"


class MediaKind(StrEnum):
    """Kind of a media item, as exposed to clients."""

    MOVIE = "Movie"
    SERIES = "Series"
    ALBUM = "Album"
    UNKNOWN = "Unknown"

    @classmethod
    def from_catalog(cls, kind: str | None) -> MediaKind:
        """Map a catalog item type onto a MediaKind.

        Catalogs name music albums ``MusicAlbum``; anything unrecognized
        becomes ``Unknown`` rather than failing ingestion.
        """
        if not kind:
            return cls.UNKNOWN
        return _CATALOG_KINDS.get(kind.strip().lower(), cls.UNKNOWN)


_CATALOG_KINDS: dict[str, MediaKind] = {
    "movie": MediaKind.MOVIE,
    "series": MediaKind.SERIES,
    "album": MediaKind.ALBUM,
    "musicalbum": MediaKind.ALBUM,
}

# Catalog item type requested for each inclusion flag.
CATALOG_TYPE_MOVIE = "Movie"
CATALOG_TYPE_SERIES = "Series"
CATALOG_TYPE_ALBUM = "MusicAlbum"
