from __future__ import annotations

import importlib.metadata

try:
    # Dynamically pull version from installed package metadata
    __version__ = importlib.metadata.version("gaia-hedera-agent")
except importlib.metadata.PackageNotFoundError:
    # Fallback when running from a source checkout
    __version__ = "0.0.0.dev0"

from .config import Settings, load_settings
from .errors import ConfigError, GaiaHederaAgentError, PayloadError, SubmissionError

__all__ = [
    "Settings",
    "load_settings",
    "GaiaHederaAgentError",
    "ConfigError",
    "PayloadError",
    "SubmissionError",
    "__version__",
]
