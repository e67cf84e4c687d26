"""Demo script: load rock salt from a descriptor dict and render with matplotlib."""

from pathlib import Path

from matviewer import StructureViewer

OUTPUT = Path(__file__).resolve().parent / "rock_salt.pdf"

a = 5.6402

ROCK_SALT = {
    "cell": [[a, 0.0, 0.0], [0.0, a, 0.0], [0.0, 0.0, a]],
    "scaledPositions": [
        [0.0, 0.0, 0.0], [0.5, 0.0, 0.0],
        [0.5, 0.5, 0.0], [0.0, 0.5, 0.0],
        [0.5, 0.0, 0.5], [0.0, 0.0, 0.5],
        [0.0, 0.5, 0.5], [0.5, 0.5, 0.5],
    ],
    "atomicNumbers": [11, 17] * 4,
    "pbc": [True, True, True],
}


def main():
    viewer = StructureViewer({"showCopies": True})
    result = viewer.load(ROCK_SALT)
    if not result:
        raise SystemExit(f"Could not load structure: {result.message}")
    print(f"Loaded {viewer.periodicity.dimensionality}D structure")
    print(f"Atoms drawn: {len(viewer.replicated)}")
    print(f"Bonds: {len(viewer.bonds)}")

    viewer.render_mpl(OUTPUT, show=False)
    print(f"Rendered to {OUTPUT}")


if __name__ == "__main__":
    main()
