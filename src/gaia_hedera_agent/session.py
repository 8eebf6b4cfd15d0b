# SPDX-License-Identifier: Apache-2.0
"""
Interactive chat loop.

One turn at a time: read a line, run the agent under the busy indicator, print
the reply and, for prepare-only profiles, hand any prepared transaction to the
key-holding submitter. Per-turn failures are printed and the loop continues.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, AsyncContextManager, Awaitable, Callable, FrozenSet, Optional

import typer

from .agent import AgentFacade
from .handoff import DeferredExecution, Executed
from .indicator import busy_indicator
from .models import TurnResult

__all__ = ["Session", "is_exit", "EXIT_KEYWORDS"]

_LOG = logging.getLogger(__name__)

EXIT_KEYWORDS: FrozenSet[str] = frozenset({"exit", "quit"})
PROMPT = "You"
RULE = "-" * 48
NO_BYTES_MESSAGE = "(No transaction bytes were returned. This is normal for queries.)"

Reader = Callable[[], Awaitable[Optional[str]]]
Writer = Callable[[str], None]
Indicator = Callable[[str], AsyncContextManager[Any]]


def is_exit(text: Optional[str]) -> bool:
    """Empty input, EOF (None) and exit keywords all end the session."""
    if text is None:
        return True
    t = text.strip().lower()
    return not t or t in EXIT_KEYWORDS


def _prompt_blocking() -> Optional[str]:
    try:
        return typer.prompt(PROMPT, default="", show_default=False, prompt_suffix=": ")
    except (typer.Abort, EOFError):
        return None


async def prompt_line() -> Optional[str]:
    return await asyncio.to_thread(_prompt_blocking)


def _echo_err(text: str) -> None:
    typer.echo(text, err=True)


class Session:
    def __init__(
        self,
        agent: AgentFacade,
        *,
        handoff: Optional[DeferredExecution] = None,
        banner: Optional[str] = None,
        read_line: Reader = prompt_line,
        echo: Writer = typer.echo,
        echo_err: Writer = _echo_err,
        indicator: Indicator = busy_indicator,
    ) -> None:
        self._agent = agent
        self._handoff = handoff
        self._banner = banner
        self._read = read_line
        self._echo = echo
        self._err = echo_err
        self._indicator = indicator

    async def run(self) -> int:
        """Loop until the user quits. Returns the process exit code."""
        if self._banner:
            self._echo(self._banner)
        while True:
            text = await self._read()
            if is_exit(text):
                self._echo("Goodbye!")
                return 0
            await self.turn(text.strip())

    async def turn(self, text: str) -> Optional[TurnResult]:
        try:
            async with self._indicator("Thinking..."):
                result = await self._agent.invoke(text)
        except Exception as e:  # noqa: BLE001 - reported, session continues
            _LOG.debug("Agent invocation failed", exc_info=True)
            self._err(f"Error: {type(e).__name__}: {e}")
            return None

        self._echo(f"AI: {result.display_text()}")
        if self._handoff is not None:
            await self._hand_off(result)
        return result

    async def _hand_off(self, result: TurnResult) -> None:
        raw = self._handoff.find(result)
        if raw is None:
            self._echo(NO_BYTES_MESSAGE)
            return

        self._echo("\n--- Transaction bytes received. Executing... ---")
        async with self._indicator("Submitting..."):
            outcome = await self._handoff.execute(raw)
        if isinstance(outcome, Executed):
            self._echo(f"Transaction receipt: {outcome.receipt.status}")
            self._echo(f"Transaction ID: {outcome.receipt.transaction_id}")
        else:
            self._err(f"Error: transaction {outcome.stage} failed: {outcome.error}")
        self._echo(RULE)
