"""Demo: SrTiO3 perovskite unit cell, turned to an oblique viewpoint."""

from pathlib import Path

import numpy as np

from matviewer import StructureViewer, Tags
from matviewer.construction.orientation import CAMERA_RIGHT, CAMERA_UP

OUTPUT = Path(__file__).resolve().parent / "perovskite.pdf"

# SrTiO3 cubic perovskite, a = 3.905 Angstroms.
a = 3.905

descriptor = {
    "cell": (np.eye(3) * a).tolist(),
    "scaledPositions": [
        (0.0, 0.0, 0.0),
        (0.5, 0.5, 0.5),
        (0.5, 0.5, 0.0),
        (0.5, 0.0, 0.5),
        (0.0, 0.5, 0.5),
    ],
    "chemicalSymbols": ["Sr", "Ti", "O", "O", "O"],
    # Only the Ti-O octahedron bonds.
    "bonds": [(1, 2), (1, 3), (1, 4)],
    "tags": Tags(substitutions=(1,)),
}

viewer = StructureViewer(
    {"showCopies": True, "showTags": True, "viewCenter": "COC"},
    viewport=(600, 600),
)
result = viewer.load(descriptor)
if not result:
    raise SystemExit(result.message)

viewer.rotate(CAMERA_UP, np.radians(-35))
viewer.rotate(CAMERA_RIGHT, np.radians(25))
viewer.fit_to_canvas()

viewer.render_mpl(OUTPUT, background="#f4f4f4", line_width_scale=1.5)
print(f"Rendered {len(viewer.replicated)} atoms to {OUTPUT}")
