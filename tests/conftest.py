"""Pytest configuration for the int128 test suite."""

import random
import sys
from pathlib import Path

import pytest

# Add src directory to path so the suite runs without installing the package
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

DEFAULT_ROUNDS = 20_000
DEFAULT_SEED = 0x128


def pytest_addoption(parser):
    """Add --rounds and --seed options for the randomized property tests."""
    parser.addoption(
        "--rounds",
        type=int,
        default=DEFAULT_ROUNDS,
        help="Number of random cases per property test",
    )
    parser.addoption(
        "--seed",
        type=lambda s: int(s, 0),
        default=DEFAULT_SEED,
        help="Seed for the random case generator",
    )


@pytest.fixture
def rounds(request) -> int:
    return request.config.getoption("rounds")


@pytest.fixture
def rng(request) -> random.Random:
    return random.Random(request.config.getoption("seed"))
