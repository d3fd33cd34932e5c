"""Adapter interface contracts (public surface).

Re-exports the protocol implementations under
``llm_adapters.base.interfaces_parts``.
"""

from .interfaces_parts.llm_api import BaseLlmApi

__all__ = ["BaseLlmApi"]
