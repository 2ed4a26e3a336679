"""Pytest configuration and fixtures."""

import pytest

from bignumber import BigNumber, BigNumberConfig, bignumber_type

# Capacity used by most tests: large enough for products of 15-digit operands
DEFAULT_CAPACITY = 30


@pytest.fixture
def big() -> type[BigNumber]:
    """BigNumber class with the default test capacity."""
    return BigNumber[DEFAULT_CAPACITY]


@pytest.fixture
def small() -> type[BigNumber]:
    """BigNumber class holding at most 3 digits."""
    return BigNumber[3]


@pytest.fixture
def truncating() -> type[BigNumber]:
    """3-digit BigNumber class that drops overflowing digits instead of raising."""
    return bignumber_type(3, BigNumberConfig(reject_on_overflow=False))
