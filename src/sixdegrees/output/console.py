"""Rich Console factory and theme for sixdegrees output.

Creates Console instances that render to a StringIO buffer, preserving
the ``render_result() -> str`` contract. In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

SIX_THEME = Theme(
    {
        "six.ok": "bold green",
        "six.error": "bold red",
        "six.warning": "bold yellow",
        "six.op": "bold cyan",
        "six.key": "dim",
        "six.id": "bold blue",
        "six.path": "dim",
        "six.name": "bold",
        "six.person": "green",
        "six.media.movie": "magenta",
        "six.media.series": "blue",
        "six.media.album": "yellow",
        "six.role": "italic",
    }
)

_MEDIA_STYLES: dict[str, str] = {
    "Movie": "six.media.movie",
    "Series": "six.media.series",
    "Album": "six.media.album",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=SIX_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_node(node_type: str, media_kind: str | None = None) -> str:
    """Return the Rich style name for a person, or a media item of *media_kind*."""
    if node_type == "person":
        return "six.person"
    return _MEDIA_STYLES.get(media_kind or "", "")
