"""llm_adapters.config.defaults
============================

Default vendor endpoint roots used by the client registry when a
``ProviderConfig`` does not set ``api_base``. Only plain constants live here
(no I/O, no imports from other adapter packages) so every layer can import it
without cycles.
"""

from __future__ import annotations

from typing import Dict

# ---- Bespoke wire formats ----
ANTHROPIC_DEFAULT_BASE_URL = "https://api.anthropic.com/v1/"

# ---- OpenAI-compatible vendors ----
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1/"

OPENAI_COMPATIBLE_BASE_URLS: Dict[str, str] = {
    "openai": OPENAI_DEFAULT_BASE_URL,
    "xai": "https://api.x.ai/v1/",
    "voyage": "https://api.voyageai.com/v1/",
    "mistral": "https://api.mistral.ai/v1/",
    "deepinfra": "https://api.deepinfra.com/v1/openai/",
    "vllm": "http://localhost:8000/v1/",
    "groq": "https://api.groq.com/openai/v1/",
    "sambanova": "https://api.sambanova.ai/v1/",
    "text-gen-webui": "http://127.0.0.1:5000/v1/",
    "openrouter": "https://openrouter.ai/api/v1/",
    "cerebras": "https://api.cerebras.ai/v1/",
    "kindo": "https://llm.kindo.ai/v1/",
    "msty": "http://localhost:10000/",
    "nvidia": "https://integrate.api.nvidia.com/v1/",
    "ovhcloud": "https://oai.endpoints.kepler.ai.cloud.ovh.net/v1/",
    "scaleway": "https://api.scaleway.ai/v1/",
    "fireworks": "https://api.fireworks.ai/inference/v1/",
    "together": "https://api.together.xyz/v1/",
    "ncompass": "https://api.ncompass.tech/v1/",
    "novita": "https://api.novita.ai/v3/openai/",
    "nebius": "https://api.studio.nebius.ai/v1/",
    "function-network": "https://api.function.network/v1/",
    "llama.cpp": "http://localhost:8000/",
    "llamafile": "http://localhost:8000/",
    "lmstudio": "http://localhost:1234/",
    "ollama": "http://localhost:11434/v1/",
    "deepseek": "https://api.deepseek.com/",
    "moonshot": "https://api.moonshot.cn/v1/",
}

# Vendors that honor ``stream_options.include_usage`` and only then report
# usage on streams.
STREAM_USAGE_OPTION_PROVIDERS = frozenset({"openai", "groq", "deepseek", "together", "fireworks", "openrouter"})

# Caching strategy applied to Anthropic requests when none is configured.
DEFAULT_CACHING_STRATEGY = "system_and_tools"

__all__ = [
    "ANTHROPIC_DEFAULT_BASE_URL",
    "OPENAI_DEFAULT_BASE_URL",
    "OPENAI_COMPATIBLE_BASE_URLS",
    "STREAM_USAGE_OPTION_PROVIDERS",
    "DEFAULT_CACHING_STRATEGY",
]
