"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages.
"""

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local propbind package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

from propbind.binding import clear_caches  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_binding_caches() -> Iterator[None]:
    """Each test starts with empty accessor and binding-map caches."""
    clear_caches()
    yield
    clear_caches()
