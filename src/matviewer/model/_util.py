"""Helpers for the camelCase JSON form of model dataclasses."""

from __future__ import annotations

import dataclasses
import functools


@functools.cache
def _field_defaults(cls: type) -> dict:
    """Map each field of dataclass *cls* with a plain default to that default.

    Fields without a default, or with a ``default_factory``, are left
    out.  ``to_dict()`` skips any field still equal to its entry here.
    """
    return {
        f.name: f.default
        for f in dataclasses.fields(cls)
        if f.default is not dataclasses.MISSING
    }


def _snake_to_camel(name: str) -> str:
    """``"show_copies"`` -> ``"showCopies"``."""
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)
