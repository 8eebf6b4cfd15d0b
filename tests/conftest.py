# tests/conftest.py
import contextlib
from types import SimpleNamespace

import pytest

from gaia_hedera_agent.models import StepRecord, SubmissionReceipt, TurnResult

REQUIRED_ENV = {
    "GAIA_NODE_URL": "http://localhost:8080/v1",
    "GAIA_API_KEY": "gaia-test-key",
    "GAIA_MODEL_NAME": "llama",
    "ACCOUNT_ID": "0.0.1234",
    "PRIVATE_KEY": "0x" + "11" * 32,
}

OPTIONAL_ENV = (
    "LLM_TEMPERATURE", "GAIA_PREFLIGHT", "HEDERA_KEY_TYPE", "HEDERA_NETWORK",
    "AGENT_PROFILE", "AGENT_SYSTEM_PROMPT", "AGENT_MEMORY_WINDOW", "AGENT_VERBOSE",
    "LOG_LEVEL", "LOG_FORMAT",
)

# Bytes of a (pretend) frozen transfer transaction.
TX_BYTES = b"\x0a\x1b\xff\x00tx"


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """No app variables set, and no stray .env in the working directory."""
    for k in list(REQUIRED_ENV) + list(OPTIONAL_ENV):
        monkeypatch.delenv(k, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


@pytest.fixture
def env(clean_env):
    for k, v in REQUIRED_ENV.items():
        clean_env.setenv(k, v)
    clean_env.setenv("GAIA_PREFLIGHT", "false")
    return clean_env


# ---------------------------------------------------------------------------
# Fakes for the session driver
# ---------------------------------------------------------------------------

class FakeAgent:
    """Stands in for AgentFacade; replays canned TurnResults or raises canned errors."""

    def __init__(self, *results):
        self._results = list(results)
        self.calls = []

    async def invoke(self, text):
        self.calls.append(text)
        r = self._results.pop(0)
        if isinstance(r, BaseException):
            raise r
        return r


class FakeSubmitter:
    def __init__(self, status="SUCCESS", transaction_id="0.0.1234@1760000000.000000001", error=None):
        self.status = status
        self.transaction_id = transaction_id
        self.error = error
        self.submitted = []

    async def submit(self, raw):
        self.submitted.append(raw)
        if self.error is not None:
            raise self.error
        return SubmissionReceipt(status=self.status, transaction_id=self.transaction_id)


class Transcript:
    """Collects indicator start/stop and printed lines in order."""

    def __init__(self, *lines):
        self.events = []
        self._lines = list(lines)

    async def read(self):
        return self._lines.pop(0) if self._lines else None

    def out(self, text):
        self.events.append(("out", text))

    def err(self, text):
        self.events.append(("err", text))

    @contextlib.asynccontextmanager
    async def indicator(self, label):
        self.events.append(("start", label))
        try:
            yield
        finally:
            self.events.append(("stop", label))

    def printed(self):
        return [text for kind, text in self.events if kind in ("out", "err")]


def agent_action(tool, tool_input=None):
    return SimpleNamespace(tool=tool, tool_input=tool_input or {})


def turn(output, *observations, tool="transfer_hbar_tool"):
    steps = [StepRecord(tool=tool, observation=o) for o in observations]
    return TurnResult(output=output, steps=steps, raw={"output": output})


