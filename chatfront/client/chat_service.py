from __future__ import annotations

import os
from typing import Any, Mapping, Optional, Sequence, Union

import httpx
import structlog
from pydantic import BaseModel

from ..config import init_env
from ..models import ChatMessage, ChatResponse, RuntimeConfig
from .config import resolve_api_base_url


DEFAULT_MAX_CONCURRENCY = 5
CHAT_PATH = "/api/chat"
ORG_UNIT_HEADER = "org-unit-id"

log = structlog.get_logger(__name__)

MessageLike = Union[ChatMessage, Mapping[str, Any]]


def _dump_message(msg: MessageLike) -> dict[str, Any]:
    if isinstance(msg, BaseModel):
        # Only what the caller set, so the wire body mirrors the input
        return msg.model_dump(exclude_unset=True)
    return dict(msg)


def build_chat_request(messages: Sequence[MessageLike], max_concurrency: int = DEFAULT_MAX_CONCURRENCY) -> dict[str, Any]:
    return {
        "config": {"max_concurrency": max_concurrency},
        "input": {"messages": [_dump_message(m) for m in messages]},
    }


class ChatService:
    """Posts a conversation to the backend chat endpoint.

    Holds only immutable settings; every call opens its own HTTP client, so
    concurrent calls don't share state (and don't order relative to each other).
    """

    def __init__(
        self,
        base_url: str,
        org_unit_id: str,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        validate_response: bool = False,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.org_unit_id = org_unit_id
        self.max_concurrency = max_concurrency
        self.validate_response = validate_response
        self._transport = transport

    @classmethod
    def from_environment(
        cls,
        runtime_config: Union[RuntimeConfig, Mapping[str, Any], None] = None,
        **kwargs,
    ) -> "ChatService":
        init_env()
        org_unit_id = os.getenv("ORG_UNIT_ID")
        if not org_unit_id:
            raise RuntimeError("ORG_UNIT_ID is not set")
        max_concurrency = int(os.getenv("CHAT_MAX_CONCURRENCY") or DEFAULT_MAX_CONCURRENCY)
        return cls(
            base_url=resolve_api_base_url(runtime_config),
            org_unit_id=org_unit_id,
            max_concurrency=max_concurrency,
            **kwargs,
        )

    @property
    def chat_url(self) -> str:
        return f"{self.base_url}{CHAT_PATH}"

    def _headers(self) -> dict[str, str]:
        return {"Content-Type": "application/json", ORG_UNIT_HEADER: self.org_unit_id}

    async def send_message(self, messages: Sequence[MessageLike]) -> dict[str, Any]:
        """Send the conversation and return the backend's decoded reply as-is.

        Raises httpx.TransportError on network failure, httpx.HTTPStatusError
        on a non-2xx reply and ValueError when the body is not JSON.
        """
        payload = build_chat_request(messages, self.max_concurrency)
        log.debug("Sending chat request", url=self.chat_url, messages=len(payload["input"]["messages"]))

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                r = await client.post(self.chat_url, json=payload, headers=self._headers())
                r.raise_for_status()
                data = r.json()
        except httpx.HTTPStatusError as e:
            log.warning("Chat request rejected", url=self.chat_url, status=e.response.status_code)
            raise
        except httpx.TransportError as e:
            log.warning("Chat request failed", url=self.chat_url, error=str(e))
            raise

        if self.validate_response:
            ChatResponse.model_validate(data)
        return data
