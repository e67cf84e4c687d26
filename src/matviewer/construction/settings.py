"""Viewer option save/load for JSON files."""

from __future__ import annotations

import json
from pathlib import Path

from matviewer.model import ViewerOptions


def save_options(path: str | Path, options: ViewerOptions) -> None:
    """Save viewer options to a JSON file.

    Only options that differ from their defaults are written, under
    the same camelCase keys that :meth:`ViewerOptions.from_dict`
    accepts.  The file is human-readable with two-space indentation.

    Args:
        path: Destination file path.
        options: The options to save.
    """
    Path(path).write_text(json.dumps(options.to_dict(), indent=2) + "\n")


def load_options(path: str | Path) -> ViewerOptions:
    """Load viewer options from a JSON file.

    Missing options take their defaults.

    Args:
        path: Source file path.

    Returns:
        The parsed :class:`ViewerOptions`.

    Raises:
        ValueError: If the file is not a JSON object or contains an
            unknown option.
    """
    data = json.loads(Path(path).read_text())
    if not isinstance(data, dict):
        raise ValueError(
            f"options file must hold a JSON object, got {type(data).__name__}"
        )
    return ViewerOptions.from_dict(data)
