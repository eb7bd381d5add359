"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, imd.toml only contains overrides.
ImdConfig is the shape of the file itself; ImdSettings layers env vars and
CLI flags on top.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- imd.toml sections ---


class RenderConfig(BaseModel):
    """[render] section."""

    model_config = {"frozen": True}

    raw_prefix: str = "/api/raw"
    files_prefix: str = "/files"
    strict_undefined: bool = True


class SecretsConfig(BaseModel):
    """[secrets] section."""

    model_config = {"frozen": True}

    placeholder: str = "#ENCRYPTED#"
    prompt_text: str = "Enter the encryption password"


class ImdConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    render: RenderConfig = Field(default_factory=RenderConfig)
    secrets: SecretsConfig = Field(default_factory=SecretsConfig)
