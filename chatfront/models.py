from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


MessageType = Literal["human", "ai"]


class ChatMessage(BaseModel):
    # Backend-defined keys we don't know about are carried through
    model_config = ConfigDict(extra="allow")

    content: str = Field(..., description="Message text")
    type: MessageType = Field(..., description="Speaker role")
    id: Optional[str] = None
    name: Optional[str] = None
    additional_kwargs: Optional[dict[str, Any]] = None
    response_metadata: Optional[dict[str, Any]] = None
    example: Optional[bool] = Field(default=None, description="Few-shot example rather than live turn")


class ChatOutput(BaseModel):
    messages: list[ChatMessage]


class ChatResponse(BaseModel):
    output: ChatOutput


class RuntimeConfig(BaseModel):
    apiBaseUrl: str
