"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, sixdegrees.toml only contains
overrides. An empty file (or none at all) is a valid configuration.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from sixdegrees.domain.types import CATALOG_TYPE_ALBUM, CATALOG_TYPE_MOVIE, CATALOG_TYPE_SERIES


class CatalogConfig(BaseModel):
    """[catalog] section."""

    model_config = {"frozen": True}

    path: Path | None = None
    include_movies: bool = True
    include_tv: bool = True
    include_music: bool = True
    image_url_template: str = "/Items/{id}/Images/Primary"

    def included_types(self) -> list[str]:
        """Catalog item types enabled by the inclusion flags."""
        types: list[str] = []
        if self.include_movies:
            types.append(CATALOG_TYPE_MOVIE)
        if self.include_tv:
            types.append(CATALOG_TYPE_SERIES)
        if self.include_music:
            types.append(CATALOG_TYPE_ALBUM)
        return types

    def image_url(self, item_id: str) -> str:
        return self.image_url_template.format(id=item_id)


class CacheConfig(BaseModel):
    """[cache] section."""

    model_config = {"frozen": True}

    refresh_interval_minutes: int = Field(default=60, ge=0)
    directory: Path = Path(".sixdegrees")
    filename: str = "graph-cache.json"


class SearchConfig(BaseModel):
    """[search] section."""

    model_config = {"frozen": True}

    max_search_results: int = 50
    max_graph_nodes: int = 500
    max_depth: int = 6
    default_degree: int = 2
