from __future__ import annotations

import json
import os
import re
from typing import Any, Mapping, Optional, Union

import httpx

from ..config import DEFAULT_API_BASE_URL
from ..models import RuntimeConfig


BUILD_TIME_ENV_VAR = "VITE_API_BASE_URL"

_CONFIG_SCRIPT_RE = re.compile(r"window\.__APP_CONFIG__\s*=\s*(\{.*\})\s*;?\s*$", re.DOTALL)


def resolve_api_base_url(runtime_config: Union[RuntimeConfig, Mapping[str, Any], None] = None) -> str:
    """Pick the chat API base URL.

    Order: the runtime-injected config (what /config.js sets), then the
    build-time ``VITE_API_BASE_URL`` environment value, then the local default.
    """
    injected = None
    if isinstance(runtime_config, RuntimeConfig):
        injected = runtime_config.apiBaseUrl
    elif runtime_config is not None:
        injected = runtime_config.get("apiBaseUrl")
    return injected or os.getenv(BUILD_TIME_ENV_VAR) or DEFAULT_API_BASE_URL


def parse_config_script(text: str) -> RuntimeConfig:
    m = _CONFIG_SCRIPT_RE.search(text.strip())
    if not m:
        raise ValueError("not a window.__APP_CONFIG__ script")
    return RuntimeConfig.model_validate(json.loads(m.group(1)))


async def fetch_runtime_config(server_url: str, transport: Optional[httpx.AsyncBaseTransport] = None) -> RuntimeConfig:
    """Load /config.js from a running server and return what it injects."""
    async with httpx.AsyncClient(transport=transport) as client:
        r = await client.get(f"{server_url.rstrip('/')}/config.js")
        r.raise_for_status()
    return parse_config_script(r.text)
