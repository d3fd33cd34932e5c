"""Client factory and static provider registry.

Purpose
-------
Resolve a provider identifier (``"anthropic"``, ``"groq"``, ``"mock"`` ...)
to a configured client implementing ``BaseLlmApi``. Client modules are
imported lazily with ``importlib`` so importing the factory stays cheap.

Registry
--------
- Bespoke wire formats map to dedicated clients (``anthropic``, ``mock``).
- Every OpenAI-compatible vendor maps to the generic ``OpenAIApi``
  parameterized by its default ``api_base`` and whether streaming usage must
  be requested explicitly.

The registry is populated at import time. Adding a provider means adding an
entry (or calling :meth:`ProviderFactory.register` during application
start-up); it is not mutated while requests run.

Failure semantics
-----------------
Unknown identifiers, import failures, missing classes and constructor
errors all raise :class:`UnsupportedProviderError`.
"""

from __future__ import annotations

from dataclasses import dataclass
from importlib import import_module
from typing import Any, Dict, Optional, Tuple

from ..config import ProviderConfig
from ..config.defaults import (
    ANTHROPIC_DEFAULT_BASE_URL,
    OPENAI_COMPATIBLE_BASE_URLS,
    STREAM_USAGE_OPTION_PROVIDERS,
)
from .errors import UnsupportedProviderError

_OPENAI_MODULE = "llm_adapters.openai.client"


@dataclass(frozen=True)
class _ProviderSpec:
    """Registry entry: where the client lives and how to parameterize it."""

    module: str
    class_name: str
    api_base: Optional[str] = None
    stream_usage: Optional[bool] = None

    def constructor_kwargs(self) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {}
        if self.api_base is not None:
            kwargs["default_api_base"] = self.api_base
        if self.stream_usage is not None:
            kwargs["stream_usage"] = self.stream_usage
        return kwargs


def _openai_compatible(api_base: str, provider_id: str) -> _ProviderSpec:
    return _ProviderSpec(
        module=_OPENAI_MODULE,
        class_name="OpenAIApi",
        api_base=api_base,
        stream_usage=provider_id in STREAM_USAGE_OPTION_PROVIDERS,
    )


def create(provider_id: str, config: Optional[ProviderConfig] = None, **kwargs: Any) -> Any:
    """Delegate to :meth:`ProviderFactory.create`."""
    return ProviderFactory.create(provider_id, config, **kwargs)


class ProviderFactory:
    """Create clients from provider identifiers."""

    _PROVIDERS: Dict[str, _ProviderSpec] = {
        "anthropic": _ProviderSpec(
            module="llm_adapters.anthropic.client",
            class_name="AnthropicApi",
            api_base=ANTHROPIC_DEFAULT_BASE_URL,
        ),
        "mock": _ProviderSpec(module="llm_adapters.mock.client", class_name="MockApi"),
        **{pid: _openai_compatible(base, pid) for pid, base in OPENAI_COMPATIBLE_BASE_URLS.items()},
    }

    @classmethod
    def create(cls, provider_id: str, config: Optional[ProviderConfig] = None, **kwargs: Any) -> Any:
        """Create the client registered under ``provider_id``.

        Parameters
        ----------
        provider_id:
            Registry identifier, matched case-insensitively.
        config:
            Client configuration; defaults to an empty ``ProviderConfig``.
        **kwargs:
            Extra constructor arguments (e.g. ``transport`` for tests).
            They override registry defaults.

        Raises
        ------
        UnsupportedProviderError
            Unknown identifier, or the client could not be imported or built.
        """
        name = (provider_id or "").strip().lower()
        spec = cls._PROVIDERS.get(name)
        if spec is None:
            raise UnsupportedProviderError(message=f"Unknown provider '{provider_id}'", provider=name or "unknown")

        try:
            module = import_module(spec.module)
        except ImportError as exc:  # pragma: no cover - packaging failure
            raise UnsupportedProviderError(
                message=f"Failed to import module '{spec.module}' for provider '{name}': {exc}",
                provider=name,
                raw=exc,
            ) from exc

        try:
            klass = getattr(module, spec.class_name)
        except AttributeError as exc:
            raise UnsupportedProviderError(
                message=f"Client class '{spec.class_name}' not found in '{spec.module}' for provider '{name}'",
                provider=name,
                raw=exc,
            ) from exc

        merged = {**spec.constructor_kwargs(), **kwargs}
        try:
            return klass(config or ProviderConfig(), provider_name=name, **merged)
        except TypeError as exc:
            raise UnsupportedProviderError(
                message=f"Invalid arguments for '{name}' client constructor: {exc}",
                provider=name,
                raw=exc,
            ) from exc
        except (OSError, ValueError) as exc:
            raise UnsupportedProviderError(
                message=f"Failed to initialize provider '{name}': {exc}",
                provider=name,
                raw=exc,
            ) from exc

    @classmethod
    def register(
        cls,
        provider_id: str,
        *,
        module: str,
        class_name: str,
        api_base: Optional[str] = None,
        stream_usage: Optional[bool] = None,
        replace: bool = False,
    ) -> None:
        """Add a registry entry.

        Raises
        ------
        ValueError
            Blank identifier/module/class, or an existing id without ``replace``.
        """
        name = provider_id.strip().lower()
        if not name or not module.strip() or not class_name.strip():
            raise ValueError("provider_id, module and class_name must be non-empty")
        if name in cls._PROVIDERS and not replace:
            raise ValueError(f"provider '{name}' is already registered")
        cls._PROVIDERS[name] = _ProviderSpec(
            module=module, class_name=class_name, api_base=api_base, stream_usage=stream_usage
        )

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        """Return registered identifiers in registration order."""
        return tuple(cls._PROVIDERS.keys())

    @classmethod
    def default_api_base(cls, provider_id: str) -> Optional[str]:
        spec = cls._PROVIDERS.get(provider_id.strip().lower())
        return spec.api_base if spec is not None else None


__all__ = ["ProviderFactory", "create"]
