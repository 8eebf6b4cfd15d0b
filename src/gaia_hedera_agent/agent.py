# SPDX-License-Identifier: Apache-2.0
"""
Agent façade: a LangChain tool-calling agent over the Hedera agent toolkit.

One AgentFacade is built per session from (settings, profile, toolkit client).
It keeps the conversation memory and exposes a single async `invoke()` that
returns a TurnResult with the final text and every intermediate tool step.
Intermediate steps are always requested: in RETURN_BYTES mode that is where
the prepared transaction bytes live.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from .config import Settings
from .errors import ConfigError
from .models import StepRecord, TurnResult
from .profiles import ProfileBase

__all__ = ["AgentFacade", "build_agent", "to_turn_result", "resolve_tool_names"]

_LOG = logging.getLogger(__name__)

# Toolkit plugins loaded for every profile; the profile's tool list narrows them.
CORE_PLUGINS: Tuple[str, ...] = (
    "core_account_plugin",
    "core_account_query_plugin",
    "core_consensus_plugin",
    "core_consensus_query_plugin",
    "core_token_plugin",
    "core_token_query_plugin",
    "core_misc_query_plugin",
    "core_transaction_query_plugin",
)


# ---------------------------------------------------------------------------
# Result conversion
# ---------------------------------------------------------------------------

def _step_from_pair(pair: Any) -> StepRecord:
    action, observation = pair
    return StepRecord(
        tool=str(getattr(action, "tool", "unknown")),
        tool_input=getattr(action, "tool_input", None),
        observation=observation,
    )


def to_turn_result(response: Any) -> TurnResult:
    """Convert an AgentExecutor response dict into a TurnResult."""
    if not isinstance(response, Mapping):
        return TurnResult(output=None, raw=response)
    output = response.get("output")
    if output is not None and not isinstance(output, str):
        output = str(output)
    steps = [_step_from_pair(p) for p in (response.get("intermediate_steps") or [])]
    return TurnResult(output=output, steps=steps, raw=response)


class AgentFacade:
    """Free text in, TurnResult out. Conversation history stays inside the executor's memory."""

    def __init__(self, executor: Any, profile: ProfileBase) -> None:
        self._executor = executor
        self.profile = profile

    async def invoke(self, text: str) -> TurnResult:
        t0 = time.perf_counter()
        response = await self._executor.ainvoke({"input": text})
        result = to_turn_result(response)
        if _LOG.isEnabledFor(logging.DEBUG):
            _LOG.debug(
                "Agent turn done in %.1f ms",
                (time.perf_counter() - t0) * 1000.0,
                extra={"tools": [s.tool for s in result.steps], "profile": self.profile.id},
            )
        return result


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

def _toolkit_catalog(plugins_module: Any) -> Tuple[List[Any], Dict[str, str]]:
    """Collect the core plugins and merge their `<plugin>_tool_names` tables."""
    plugins: List[Any] = []
    names: Dict[str, str] = {}
    for attr in CORE_PLUGINS:
        plugin = getattr(plugins_module, attr, None)
        if plugin is None:
            _LOG.debug("Toolkit does not ship plugin %s", attr)
            continue
        plugins.append(plugin)
        table = getattr(plugins_module, f"{attr}_tool_names", None)
        if isinstance(table, Mapping):
            names.update(table)
    return plugins, names


def resolve_tool_names(keys: Iterable[str], table: Mapping[str, str]) -> List[str]:
    """Map symbolic keys (TRANSFER_HBAR_TOOL) to toolkit tool names; unknown keys are fatal."""
    keys = list(keys)
    missing = [k for k in keys if k not in table]
    if missing:
        raise ConfigError(f"Toolkit has no tool(s): {', '.join(missing)}")
    return [table[k] for k in keys]


def _memory(settings: Settings) -> Any:
    from langchain_classic.memory import (  # type: ignore
        ConversationBufferMemory,
        ConversationBufferWindowMemory,
    )

    common = dict(
        memory_key="chat_history",
        input_key="input",
        output_key="output",
        return_messages=True,
    )
    if settings.memory_window > 0:
        return ConversationBufferWindowMemory(k=settings.memory_window, **common)
    return ConversationBufferMemory(**common)


def build_agent(
    settings: Settings,
    profile: ProfileBase,
    client: Any,
    *,
    llm: Any = None,
) -> AgentFacade:
    """
    Assemble toolkit, prompt, memory and executor for `profile`.

    `client` is the toolkit's Hedera client: key-holding for autonomous
    profiles, key-less for prepare-only ones.
    """
    try:
        from hedera_agent_kit import plugins as kit_plugins  # type: ignore
        from hedera_agent_kit.langchain.toolkit import HederaLangchainToolkit  # type: ignore
        from hedera_agent_kit.shared.configuration import (  # type: ignore
            AgentMode,
            Configuration,
            Context,
        )
        from langchain_classic.agents import AgentExecutor, create_tool_calling_agent  # type: ignore
        from langchain_core.prompts import ChatPromptTemplate  # type: ignore
    except Exception as e:  # pragma: no cover
        raise ConfigError(
            "Agent dependencies missing. Install `hedera-agent-kit`, `langchain-classic` "
            f"and `langchain-core`: {e}"
        ) from e

    if llm is None:
        from .llm import langchain_llm
        llm = langchain_llm(settings)

    plugins, table = _toolkit_catalog(kit_plugins)
    tool_names = resolve_tool_names(profile.tools, table)
    mode = AgentMode.RETURN_BYTES if profile.prepares_only else AgentMode.AUTONOMOUS

    toolkit = HederaLangchainToolkit(
        client=client,
        configuration=Configuration(
            tools=tool_names,
            plugins=plugins,
            # The agent needs the user's account even when it holds no key.
            context=Context(mode=mode, account_id=settings.account_id),
        ),
    )
    tools: Sequence[Any] = toolkit.get_tools()

    prompt = ChatPromptTemplate.from_messages([
        ("system", settings.system_prompt or profile.system_prompt),
        ("placeholder", "{chat_history}"),
        ("human", "{input}"),
        ("placeholder", "{agent_scratchpad}"),
    ])
    agent = create_tool_calling_agent(llm, tools, prompt)
    executor = AgentExecutor(
        agent=agent,
        tools=tools,
        memory=_memory(settings),
        verbose=settings.agent_verbose,
        handle_parsing_errors=True,
        return_intermediate_steps=True,
    )
    _LOG.info(
        "Agent ready",
        extra={"profile": profile.id, "mode": profile.mode, "tools": tool_names},
    )
    return AgentFacade(executor, profile)
