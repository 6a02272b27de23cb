"""Test helpers for Habit Fairy integration tests.

    from tests.helpers import (
        InMemoryBackend, store_slices, stored_slice,
        setup_integration,
    )

- storage.py: Read/write the mocked store file, in-memory backend
- setup.py: Set up the integration after preloading storage
"""

from tests.helpers.setup import setup_integration
from tests.helpers.storage import InMemoryBackend, store_slices, stored_slice

__all__ = ["InMemoryBackend", "setup_integration", "store_slices", "stored_slice"]
