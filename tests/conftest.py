"""Shared test fixtures for matviewer."""

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

ROCK_SALT_A = 5.6402


@pytest.fixture
def rock_salt_dict():
    """Eight-atom conventional NaCl cell, Na and Cl alternating."""
    return {
        "cell": (np.eye(3) * ROCK_SALT_A).tolist(),
        "scaledPositions": [
            [0.0, 0.0, 0.0], [0.5, 0.0, 0.0],
            [0.5, 0.5, 0.0], [0.0, 0.5, 0.0],
            [0.5, 0.0, 0.5], [0.0, 0.0, 0.5],
            [0.0, 0.5, 0.5], [0.5, 0.5, 0.5],
        ],
        "atomicNumbers": [11, 17] * 4,
        "pbc": [True, True, True],
    }


@pytest.fixture
def dimer_dict():
    """Two carbon atoms 1 angstrom apart, no cell."""
    return {
        "positions": [[0.0, 0.5, 0.0], [0.0, 1.5, 0.0]],
        "atomicNumbers": [6, 6],
        "pbc": [False, False, False],
    }


@pytest.fixture
def water_dict():
    """A water molecule given by chemical symbols."""
    return {
        "positions": [
            [0.0, 0.0, 0.0],
            [0.757, 0.586, 0.0],
            [-0.757, 0.586, 0.0],
        ],
        "chemicalSymbols": ["O", "H", "H"],
        "pbc": [False, False, False],
    }


@pytest.fixture
def chain_dict():
    """A 1D carbon chain with 1.5 angstrom spacing along a."""
    return {
        "cell": [[1.5, 0.0, 0.0], [0.0, 10.0, 0.0], [0.0, 0.0, 10.0]],
        "scaledPositions": [[0.0, 0.0, 0.0]],
        "atomicNumbers": [6],
        "pbc": [True, False, False],
    }


@pytest.fixture
def square_sheet_dict():
    """A 2D square net of carbon atoms, periodic along a and b."""
    return {
        "cell": [[3.0, 0.0, 0.0], [0.0, 3.0, 0.0], [0.0, 0.0, 10.0]],
        "scaledPositions": [[0.0, 0.0, 0.0]],
        "atomicNumbers": [6],
        "pbc": [True, True, False],
    }


@pytest.fixture
def dimer_viewer(dimer_dict):
    """A viewer with the carbon dimer loaded on a small canvas."""
    from matviewer import StructureViewer

    viewer = StructureViewer(viewport=(200, 150))
    assert viewer.load(dimer_dict)
    return viewer


@pytest.fixture
def rock_salt_viewer(rock_salt_dict):
    """A viewer with rock salt loaded on a small canvas."""
    from matviewer import StructureViewer

    viewer = StructureViewer(viewport=(200, 150))
    assert viewer.load(rock_salt_dict)
    return viewer
