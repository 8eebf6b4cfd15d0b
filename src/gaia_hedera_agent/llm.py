# src/gaia_hedera_agent/llm.py
"""
Language model wiring for the agent.

- langchain_llm()  -> LangChain ChatModel for the OpenAI-compatible endpoint
- preflight()      -> one cheap GET {base}/models to catch a wrong URL, key or
                      model name before the first turn (warn, never fail)

Gaia nodes (and most self-hosted gateways) speak the OpenAI chat API, so
`langchain_openai.ChatOpenAI` pointed at GAIA_NODE_URL is all that is needed.
"""

from __future__ import annotations

import logging
from typing import Any, List, NamedTuple

import httpx

from .config import Settings
from .errors import ConfigError

__all__ = ["langchain_llm", "preflight", "warn_if_unreachable", "PreflightResult"]

_LOG = logging.getLogger(__name__)

PREFLIGHT_TIMEOUT_SEC = 5.0


def langchain_llm(settings: Settings) -> Any:
    """Return a ChatOpenAI bound to the configured endpoint, key and model."""
    try:
        from langchain_openai import ChatOpenAI  # type: ignore
    except Exception as e:  # pragma: no cover
        raise ConfigError("Install `langchain-openai`: `pip install langchain-openai`.") from e

    return ChatOpenAI(
        base_url=settings.gaia_node_url,
        api_key=settings.gaia_api_key.get_secret_value(),
        model=settings.gaia_model_name,
        temperature=settings.temperature,
    )


class PreflightResult(NamedTuple):
    ok: bool
    detail: str


def _model_ids(data: Any) -> List[str]:
    items = data.get("data") if isinstance(data, dict) else None
    if not isinstance(items, list):
        return []
    return [str(m.get("id")) for m in items if isinstance(m, dict) and m.get("id")]


def preflight(settings: Settings, *, client: httpx.Client | None = None) -> PreflightResult:
    """
    Best-effort reachability check of the model endpoint.

    Returns a PreflightResult instead of raising; the caller decides whether a
    failure is worth a warning (chat) or a FAIL line (check).
    """
    url = f"{settings.gaia_node_url}/models"
    headers = {"Authorization": f"Bearer {settings.gaia_api_key.get_secret_value()}"}
    http = client or httpx.Client(timeout=PREFLIGHT_TIMEOUT_SEC)
    try:
        r = http.get(url, headers=headers)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        return PreflightResult(False, f"{url} unreachable: {type(e).__name__}: {e}")
    finally:
        if client is None:
            http.close()

    if r.status_code != 200:
        return PreflightResult(False, f"{url} returned HTTP {r.status_code}")

    try:
        ids = _model_ids(r.json())
    except ValueError:
        return PreflightResult(True, f"{url} reachable (non-JSON model list)")
    if ids and settings.gaia_model_name not in ids:
        return PreflightResult(
            False,
            f"model {settings.gaia_model_name!r} not served by endpoint (available: {', '.join(ids)})",
        )
    return PreflightResult(True, f"{url} reachable, model {settings.gaia_model_name!r}")


def warn_if_unreachable(settings: Settings) -> None:
    """Run the preflight when enabled and log a warning on failure."""
    if not settings.preflight:
        return
    result = preflight(settings)
    if result.ok:
        _LOG.debug("Preflight OK: %s", result.detail)
    else:
        _LOG.warning("Preflight failed: %s; continuing anyway.", result.detail)
