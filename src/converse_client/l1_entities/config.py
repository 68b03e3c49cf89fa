"""Configuration Pydantic models — pure schema, no infrastructure defaults."""

from __future__ import annotations

from pydantic import BaseModel


class SidecarConfig(BaseModel):
    grpc_address: str
    api_token: str | None = None  # None → DAPR_API_TOKEN env
    timeout: float | None = None  # seconds; None = no deadline


class ConversationDefaults(BaseModel):
    component: str
    temperature: float | None = None
    scrub_pii: bool | None = None


class AppConfig(BaseModel):
    sidecar: SidecarConfig
    conversation: ConversationDefaults
