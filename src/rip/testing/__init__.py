"""Test utilities for rip applications.

    from rip.testing import TestClient
"""

from rip.testing.client import TestClient

__all__ = ["TestClient"]
