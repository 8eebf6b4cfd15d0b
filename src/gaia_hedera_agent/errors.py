"""Exceptions raised by the Gaia/Hedera agent CLI."""

from __future__ import annotations


class GaiaHederaAgentError(Exception):
    """Base for all errors raised by this package."""
    pass


class ConfigError(GaiaHederaAgentError):
    """Startup configuration is missing or invalid. Always fatal."""
    pass


class PayloadError(GaiaHederaAgentError):
    """A tool observation looked like a transaction payload but could not be decoded."""

    def __init__(self, reason: str, container: object = None):
        self.reason = reason
        self.container = container
        super().__init__(f"Could not decode transaction bytes: {reason}")


class SubmissionError(GaiaHederaAgentError):
    """Decoding or submitting prepared transaction bytes failed."""

    def __init__(self, stage: str, cause: BaseException):
        self.stage = stage  # "decode" or "submit"
        self.cause = cause
        super().__init__(f"{stage} failed: {type(cause).__name__}: {cause}")
