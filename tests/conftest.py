"""
Shared fixtures for Basis Playground tests.

Provides a fresh store, a standard viewport and a few reference matrices.
"""
import matplotlib

matplotlib.use("Agg")

import pytest

from basis_playground.camera import Camera, Viewport
from basis_playground.linalg import Matrix
from basis_playground.state import AppState, StateStore


SWAP = Matrix(0.0, 1.0, 1.0, 0.0)
PROJECT_X = Matrix(1.0, 0.0, 0.0, 0.0)
SHEAR = Matrix(1.0, 1.0, 0.0, 1.0)


@pytest.fixture
def viewport():
    """800 x 600 canvas"""
    return Viewport(800, 600)


@pytest.fixture
def store():
    """Store holding the initial state"""
    return StateStore(AppState())


@pytest.fixture
def recorded(store):
    """Store plus the list of states its subscriber saw"""
    seen = []
    store.subscribe(seen.append)
    return store, seen


@pytest.fixture
def panned_camera():
    return Camera(1.5, -2.0, 50.0)
