"""Mock client package producing deterministic canned responses."""

from .client import MOCK_MODEL, MockApi

__all__ = ["MockApi", "MOCK_MODEL"]
