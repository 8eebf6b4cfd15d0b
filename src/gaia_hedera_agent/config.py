# src/gaia_hedera_agent/config.py
from __future__ import annotations

import re
from typing import Any, Literal, Optional

from pydantic import AliasChoices, Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigError

_ACCOUNT_ID_RE = re.compile(r"^\d+\.\d+\.\d+$")


def _parse_bool(value: Any) -> bool:
    """
    Robust bool parser:
    - handles actual bools
    - strips inline comments like 'false   # note'
    - accepts common truthy/falsey tokens
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        v = value.split("#", 1)[0].strip().lower()
        if v in {"1", "true", "yes", "y", "on"}:
            return True
        if v in {"0", "false", "no", "n", "off", ""}:
            return False
    return bool(value)


def _strip_comment(value: Any) -> Any:
    if isinstance(value, str):
        return value.split(" #", 1)[0].strip()
    return value


class Settings(BaseSettings):
    """
    Immutable runtime configuration, read once from the environment at startup.

    - lowercase field names, UPPERCASE env var aliases
    - secrets kept as SecretStr so they never end up in logs or reprs
    - instances are frozen; build a new one instead of mutating
    """

    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # ------------------------------------------------------------------
    # Language model endpoint (OpenAI-compatible, e.g. a Gaia node)
    # ------------------------------------------------------------------
    gaia_node_url: str = Field(
        validation_alias=AliasChoices("GAIA_NODE_URL", "gaia_node_url"),
    )
    gaia_api_key: SecretStr = Field(
        validation_alias=AliasChoices("GAIA_API_KEY", "gaia_api_key"),
    )
    gaia_model_name: str = Field(
        validation_alias=AliasChoices("GAIA_MODEL_NAME", "gaia_model_name"),
    )
    temperature: float = Field(
        default=0.0,
        validation_alias=AliasChoices("LLM_TEMPERATURE", "temperature"),
    )
    preflight: bool = Field(
        default=True,
        validation_alias=AliasChoices("GAIA_PREFLIGHT", "preflight"),
    )

    # ------------------------------------------------------------------
    # Hedera operator
    # ------------------------------------------------------------------
    account_id: str = Field(
        validation_alias=AliasChoices("ACCOUNT_ID", "account_id"),
    )
    private_key: SecretStr = Field(
        validation_alias=AliasChoices("PRIVATE_KEY", "private_key"),
    )
    key_type: Literal["ecdsa", "ed25519", "der"] = Field(
        default="ecdsa",
        validation_alias=AliasChoices("HEDERA_KEY_TYPE", "key_type"),
    )
    hedera_network: Literal["testnet", "mainnet", "previewnet"] = Field(
        default="testnet",
        validation_alias=AliasChoices("HEDERA_NETWORK", "hedera_network"),
    )

    # ------------------------------------------------------------------
    # Agent
    # ------------------------------------------------------------------
    agent_profile: str = Field(
        default="tool-calling",
        validation_alias=AliasChoices("AGENT_PROFILE", "agent_profile"),
    )
    system_prompt: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("AGENT_SYSTEM_PROMPT", "system_prompt"),
    )
    memory_window: int = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices("AGENT_MEMORY_WINDOW", "memory_window"),
    )
    agent_verbose: bool = Field(
        default=False,
        validation_alias=AliasChoices("AGENT_VERBOSE", "agent_verbose"),
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = Field(
        default="WARNING",
        validation_alias=AliasChoices("LOG_LEVEL", "log_level"),
    )
    log_format: Literal["json", "text"] = Field(
        default="json",
        validation_alias=AliasChoices("LOG_FORMAT", "log_format"),
    )

    # -------------------------
    # Validators (robust input)
    # -------------------------
    @field_validator("preflight", "agent_verbose", mode="before")
    @classmethod
    def _val_bools(cls, v: Any) -> bool:
        return _parse_bool(v)

    @field_validator("key_type", "hedera_network", "log_format", mode="before")
    @classmethod
    def _val_choices(cls, v: Any) -> Any:
        v = _strip_comment(v)
        return v.lower() if isinstance(v, str) else v

    @field_validator("gaia_node_url", "gaia_model_name", mode="before")
    @classmethod
    def _val_required_text(cls, v: Any) -> Any:
        v = _strip_comment(v)
        if isinstance(v, str) and not v:
            raise ValueError("must not be empty")
        return v

    @field_validator("gaia_node_url")
    @classmethod
    def _val_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("must be an http(s) URL")
        return v.rstrip("/")

    @field_validator("account_id", mode="before")
    @classmethod
    def _val_account_id(cls, v: Any) -> Any:
        v = _strip_comment(v)
        if isinstance(v, str) and not _ACCOUNT_ID_RE.match(v):
            raise ValueError("must look like <shard>.<realm>.<num>, e.g. 0.0.1234")
        return v

    @field_validator("private_key", "gaia_api_key", mode="before")
    @classmethod
    def _val_secret(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("must not be empty")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def _val_log_level(cls, v: Any) -> Any:
        v = _strip_comment(v)
        return v.upper() if isinstance(v, str) else v


def _describe(err: ValidationError) -> str:
    parts = []
    for item in err.errors():
        loc = ".".join(str(p) for p in item.get("loc", ())) or "settings"
        parts.append(f"{loc}: {item.get('msg', 'invalid')}")
    return "; ".join(parts)


def load_settings(**overrides: Any) -> Settings:
    """
    Build the Settings from the process environment.

    Keyword overrides (e.g. from CLI flags) win over the environment; ``None``
    values are ignored. Any validation problem is raised as ConfigError.
    """
    given = {k: v for k, v in overrides.items() if v is not None}
    try:
        return Settings(**given)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {_describe(e)}") from e
