from __future__ import annotations
from pydantic import BaseModel, ConfigDict
from typing import Any, List, Optional


class StepRecord(BaseModel):
    """One tool call made by the agent during a turn."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    tool: str
    tool_input: Any = None
    observation: Any = None


class TurnResult(BaseModel):
    """What the agent produced for one user input."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    output: Optional[str] = None
    steps: List[StepRecord] = []
    raw: Any = None

    @property
    def last_step(self) -> Optional[StepRecord]:
        return self.steps[-1] if self.steps else None

    def display_text(self) -> str:
        if self.output is not None:
            return self.output
        return str(self.raw)


class SubmissionReceipt(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: str
    transaction_id: str

    @property
    def succeeded(self) -> bool:
        return self.status == "SUCCESS"
