# SPDX-License-Identifier: Apache-2.0
"""
Human-in-the-loop hand-off for RETURN_BYTES profiles.

Per turn:

    AGENT_INVOKED -> find()    -> None            : NoTransaction
                               -> bytes           : PAYLOAD_FOUND
    PAYLOAD_FOUND -> execute() -> Executed        : decoded, submitted, receipt obtained
                               -> SubmitFailed    : decode/submit error

Nothing here raises into the session loop.
"""

from __future__ import annotations

import logging
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict

from .errors import SubmissionError
from .ledger import TransactionSubmitter
from .models import SubmissionReceipt, TurnResult
from .payload import extract_payload

__all__ = ["DeferredExecution", "NoTransaction", "Executed", "SubmitFailed", "HandoffOutcome"]

_LOG = logging.getLogger(__name__)


class NoTransaction(BaseModel):
    model_config = ConfigDict(frozen=True)
    kind: Literal["none"] = "none"


class Executed(BaseModel):
    model_config = ConfigDict(frozen=True)
    kind: Literal["executed"] = "executed"
    receipt: SubmissionReceipt


class SubmitFailed(BaseModel):
    model_config = ConfigDict(frozen=True)
    kind: Literal["failed"] = "failed"
    stage: str
    error: str


HandoffOutcome = Union[NoTransaction, Executed, SubmitFailed]


class DeferredExecution:
    """Replays bytes prepared by the key-less agent through the key-holding submitter."""

    def __init__(self, submitter: TransactionSubmitter) -> None:
        self._submitter = submitter

    def find(self, result: TurnResult) -> Optional[bytes]:
        return extract_payload(result)

    async def execute(self, raw: bytes) -> Union[Executed, SubmitFailed]:
        try:
            receipt = await self._submitter.submit(raw)
        except SubmissionError as e:
            _LOG.warning("Prepared transaction was not executed: %s", e, extra={"stage": e.stage})
            return SubmitFailed(stage=e.stage, error=f"{type(e.cause).__name__}: {e.cause}")
        except Exception as e:  # noqa: BLE001
            _LOG.exception("Unexpected failure while submitting prepared transaction")
            return SubmitFailed(stage="submit", error=f"{type(e).__name__}: {e}")
        if not receipt.succeeded:
            _LOG.warning("Transaction reached consensus with status %s", receipt.status)
        return Executed(receipt=receipt)

    async def run(self, result: TurnResult) -> HandoffOutcome:
        """find() then execute(), for callers that do not print between the two."""
        raw = self.find(result)
        if raw is None:
            return NoTransaction()
        return await self.execute(raw)
