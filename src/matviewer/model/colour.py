from __future__ import annotations

#: A colour specification accepted throughout matviewer.
#:
#: Can be any of:
#:
#: - A CSS colour name or hex string (e.g. ``"red"``, ``"#ff0000"``).
#: - A packed ``0xRRGGBB`` integer (e.g. ``0xd70000``).
#: - A single float for grey (``0.0`` = black, ``1.0`` = white).
#: - An RGB tuple or list with values in ``[0, 1]``
#:   (e.g. ``(1.0, 0.0, 0.0)``).
#:
#: See :func:`normalise_colour` for conversion to a normalised RGB tuple.
Colour = str | int | float | tuple[float, float, float] | list[float]

RGB = tuple[float, float, float]


def hex_to_rgb(value: int) -> RGB:
    """Unpack a ``0xRRGGBB`` integer into a normalised (r, g, b) tuple.

    Raises:
        ValueError: If *value* lies outside ``[0, 0xFFFFFF]``.
    """
    if not 0 <= value <= 0xFFFFFF:
        raise ValueError(f"Packed colour must be in [0, 0xFFFFFF], got {value:#x}")
    return (
        ((value >> 16) & 0xFF) / 255.0,
        ((value >> 8) & 0xFF) / 255.0,
        (value & 0xFF) / 255.0,
    )


def normalise_colour(colour: Colour) -> RGB:
    """Convert a colour specification to a normalised (r, g, b) tuple.

    Accepts CSS colour names (e.g. ``"red"``), hex strings
    (e.g. ``"#FF0000"``), packed integers (e.g. ``0xFF0000``), grey
    floats (e.g. ``0.7``), or RGB tuples (e.g. ``(1.0, 0.3, 0.3)``).

    Integers are always read as packed ``0xRRGGBB`` values, so ``1``
    is a very dark blue rather than white.  Use ``1.0`` for white.

    Args:
        colour: The colour to normalise.

    Returns:
        A tuple of three floats in [0, 1].

    Raises:
        ValueError: If the colour cannot be interpreted.
    """
    if isinstance(colour, bool):
        raise ValueError(f"Cannot interpret colour: {colour!r}")

    if isinstance(colour, int):
        return hex_to_rgb(colour)

    if isinstance(colour, float):
        if not 0.0 <= colour <= 1.0:
            raise ValueError(f"Grey value must be in [0, 1], got {colour}")
        return (colour, colour, colour)

    if isinstance(colour, (tuple, list)):
        if len(colour) != 3:
            raise ValueError(
                f"RGB sequence must have 3 elements, got {len(colour)}"
            )
        r, g, b = (float(c) for c in colour)
        for name, val in [("r", r), ("g", g), ("b", b)]:
            if not 0.0 <= val <= 1.0:
                raise ValueError(
                    f"RGB component {name} must be in [0, 1], got {val}"
                )
        return (r, g, b)

    if isinstance(colour, str):
        from matplotlib.colors import to_rgb

        try:
            return to_rgb(colour)
        except ValueError:
            raise ValueError(f"Unrecognised colour name: {colour!r}")

    raise ValueError(f"Cannot interpret colour: {colour!r}")


def luminance(rgb: tuple[float, ...]) -> float:
    """Perceived brightness of a normalised colour, in [0, 1]."""
    r, g, b = rgb[:3]
    return 0.299 * r + 0.587 * g + 0.114 * b
