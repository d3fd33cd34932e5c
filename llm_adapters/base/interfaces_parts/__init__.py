"""Interface protocol parts; prefer importing from ``llm_adapters.base.interfaces``."""

from .llm_api import BaseLlmApi

__all__ = ["BaseLlmApi"]
