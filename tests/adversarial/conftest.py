"""
Shared fixtures for adversarial tests.

Provides common test infrastructure for race condition and enumeration tests.
"""

import pytest

# Module-level marker for all adversarial tests
pytestmark = pytest.mark.adversarial


@pytest.fixture
def num_attackers() -> int:
    """Number of concurrent callers in race simulations."""
    return 10
