"""
Pytest configuration for tokfold tests.

Provides:
- Hypothesis configuration for deterministic fuzzing
- Shared fixtures (fresh strategy registry)
"""

import os

import pytest
from hypothesis import settings

from tokfold.strategies import clear_registry

# =============================================================================
# Hypothesis Configuration
# =============================================================================
# print_blob=True makes failures easy to reproduce.
# Omitting database= keeps the default .hypothesis/ example cache.

settings.register_profile(
    "default",
    print_blob=True,
    derandomize=False,
)

settings.register_profile(
    "ci",
    print_blob=True,
    derandomize=True,
)

settings.load_profile(os.environ.get("HYPOTHESIS_PROFILE", "default"))


# =============================================================================
# Shared Fixtures
# =============================================================================

@pytest.fixture
def fresh_registry():
    """Strategy registry reset to the lazily seeded defaults."""
    clear_registry()
    yield
    clear_registry()
