import pytest

from core.config import default_inputs
from engine.projection import project


@pytest.fixture
def inputs():
    """Default configuration pinned to a fixed base year."""
    return default_inputs().replace(base_year=2025)


@pytest.fixture
def projections(inputs):
    return project(inputs)
