from __future__ import annotations
import importlib
import inspect
import pkgutil
from importlib.metadata import entry_points
from typing import Any, Callable, Dict, Tuple

from .errors import ConfigError

MODE_AUTONOMOUS = "autonomous"
MODE_RETURN_BYTES = "return_bytes"


# ===== Base contract =====
class ProfileBase:
    """
    Agent profile contract. A profile is pure data; implementations override:
      - id (short identifier, e.g. 'tool_calling', 'return_bytes')
      - name (human-friendly)
      - mode (MODE_AUTONOMOUS or MODE_RETURN_BYTES)
      - system_prompt (system message for the tool-calling prompt)
      - tools (symbolic toolkit tool keys, e.g. 'TRANSFER_HBAR_TOOL')
      - banner (first line printed by the chat loop)
      - examples (sample prompts shown to the user)
    """
    id: str = "base"
    name: str = "BaseProfile"
    mode: str = MODE_AUTONOMOUS
    system_prompt: str = "You are a helpful assistant."
    tools: Tuple[str, ...] = ()
    banner: str = 'Hedera Agent CLI — type "exit" to quit'
    examples: Tuple[str, ...] = ()

    @property
    def prepares_only(self) -> bool:
        return self.mode == MODE_RETURN_BYTES

    def describe(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "mode": self.mode,
            "systemPrompt": self.system_prompt,
            "tools": list(self.tools),
            "examples": list(self.examples),
        }


# ===== Plugin discovery =====
PLUGIN_PACKAGE = "gaia_hedera_agent.profile_plugins"
ENTRY_POINT_GROUP = "gaia_hedera_agent.profiles"
Factory = Callable[[], ProfileBase]


def _coerce(obj: Any, source: str) -> ProfileBase:
    """Accept an instance, a ProfileBase subclass, or a zero-arg callable returning one."""
    if isinstance(obj, ProfileBase):
        return obj
    if inspect.isclass(obj) and issubclass(obj, ProfileBase):
        return obj()
    if callable(obj):
        p = obj()
        if isinstance(p, ProfileBase):
            return p
    raise ConfigError(f"{source} did not yield a ProfileBase")


def _factory_from_module(module_name: str) -> Factory:
    """
    Zero-arg factory for a profile module. Import problems are deferred and
    raised as ConfigError only when that profile is actually requested.
    """
    def _build() -> ProfileBase:
        try:
            mod = importlib.import_module(module_name)
        except Exception as e:
            raise ConfigError(f"Profile module {module_name} failed to import: {e}") from e
        if callable(getattr(mod, "get_profile", None)):
            return _coerce(mod.get_profile, f"{module_name}.get_profile()")
        if hasattr(mod, "Profile"):
            return _coerce(mod.Profile, f"{module_name}.Profile")
        raise ConfigError(f"Profile module {module_name} exposes neither get_profile() nor Profile")
    return _build


def _discover_builtin() -> Dict[str, Factory]:
    registry: Dict[str, Factory] = {}
    pkg = importlib.import_module(PLUGIN_PACKAGE)
    prefix = pkg.__name__ + "."
    for _, name, ispkg in pkgutil.iter_modules(pkg.__path__, prefix):
        if ispkg:
            continue
        short = name.rsplit(".", 1)[-1]   # e.g., 'tool_calling', 'return_bytes'
        registry[short] = _factory_from_module(name)
    return registry


def _discover_entry_points() -> Dict[str, Factory]:
    registry: Dict[str, Factory] = {}
    for ep in entry_points(group=ENTRY_POINT_GROUP):
        def _factory(ep=ep) -> ProfileBase:
            try:
                obj = ep.load()
            except Exception as e:
                raise ConfigError(f"Profile entry point {ep.name!r} failed to load: {e}") from e
            return _coerce(obj, f"entry point {ep.name!r}")
        registry[ep.name] = _factory
    return registry


def _registry() -> Dict[str, Factory]:
    reg = _discover_builtin()
    reg.update(_discover_entry_points())
    return reg


# Friendly names, including the names of the example scripts
_ALIASES: Dict[str, str] = {
    "default": "tool_calling",
    "autonomous": "tool_calling",
    "tool-calling": "tool_calling",
    "tool-calling-agent": "tool_calling",
    "structured-chat": "nft",
    "structured-chat-agent": "nft",
    "nft-agent": "nft",
    "return-bytes": "return_bytes",
    "return-bytes-agent": "return_bytes",
    "human-in-the-loop": "return_bytes",
    "hitl": "return_bytes",
}


def resolve_profile_id(name: str) -> str:
    want = (name or "default").lower().strip()
    return _ALIASES.get(want, want.replace("-", "_"))


def list_profiles() -> Dict[str, str]:
    """
    Returns a dict of {profile_id: 'builtin'|'entrypoint'} for discoverability.
    """
    out: Dict[str, str] = {k: "builtin" for k in _discover_builtin()}
    for k in _discover_entry_points():
        out[k] = "entrypoint"
    return out


def build_profile(name: str) -> ProfileBase:
    """Instantiate the profile selected by `name` (alias-aware). Unknown -> ConfigError."""
    want = resolve_profile_id(name)
    reg = _registry()
    factory = reg.get(want)
    if factory is None:
        known = ", ".join(sorted(reg)) or "none"
        raise ConfigError(f"Unknown agent profile {name!r} (available: {known})")
    return factory()
