from __future__ import annotations
import asyncio
import contextlib
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import typer
from dotenv import load_dotenv

from .agent import build_agent
from .config import Settings, load_settings
from .errors import ConfigError
from .handoff import DeferredExecution
from .indicator import busy_indicator
from .ledger import TransactionSubmitter, build_client, parse_operator
from .llm import preflight, warn_if_unreachable
from .logging_config import configure_logging
from .profiles import build_profile, list_profiles
from .session import Session

app = typer.Typer(add_completion=False, help="Chat with a Hedera agent backed by a Gaia (OpenAI-compatible) model.")

log = logging.getLogger("gaia_hedera_agent.cli")

EnvFileOption = typer.Option(Path(".env"), "--env-file", help="dotenv file loaded before reading the environment.")


def _load(env_file: Optional[Path], **overrides) -> Settings:
    if env_file is not None and env_file.is_file():
        # Real environment variables win over the file.
        load_dotenv(env_file, override=False)
    return load_settings(**overrides)


def _no_indicator(label: str):
    return contextlib.nullcontext()


def bootstrap(settings: Settings) -> Session:
    """Build clients, agent and hand-off for the configured profile."""
    profile = build_profile(settings.agent_profile)
    operator = parse_operator(settings)
    if profile.prepares_only:
        # The agent gets a key-less client; only the submitter can sign.
        agent_client = build_client(settings)
        handoff = DeferredExecution(TransactionSubmitter(build_client(settings, operator)))
    else:
        agent_client = build_client(settings, operator)
        handoff = None
    agent = build_agent(settings, profile, agent_client)
    return Session(
        agent,
        handoff=handoff,
        banner=profile.banner,
        indicator=busy_indicator if sys.stdout.isatty() else _no_indicator,
    )


@app.command()
def chat(
    profile: Optional[str] = typer.Option(None, "--profile", "-p", help="Agent profile (see `profiles`)."),
    env_file: Path = EnvFileOption,
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Overrides LOG_LEVEL."),
):
    """Start the interactive chat loop."""
    try:
        settings = _load(env_file, agent_profile=profile, log_level=log_level)
        configure_logging(settings.log_level, settings.log_format)
        # Profile and operator key are validated before the endpoint is probed.
        session = bootstrap(settings)
        warn_if_unreachable(settings)
    except Exception as e:  # noqa: BLE001 - any startup failure is fatal
        log.debug("Bootstrap failed", exc_info=True)
        typer.echo(f"Fatal error during CLI bootstrap: {e}", err=True)
        raise typer.Exit(code=1)

    try:
        code = asyncio.run(session.run())
    except KeyboardInterrupt:
        typer.echo("\nGoodbye!")
        code = 130
    raise typer.Exit(code=code)


@app.command()
def profiles():
    """Describe every available agent profile as JSON."""
    out = []
    for pid, source in sorted(list_profiles().items()):
        try:
            desc = build_profile(pid).describe()
        except ConfigError as e:
            desc = {"id": pid, "error": str(e)}
        desc["source"] = source
        out.append(desc)
    typer.echo(json.dumps(out, indent=2))


@app.command()
def check(env_file: Path = EnvFileOption):
    """Validate configuration, operator key and model endpoint without chatting."""
    results: List[Tuple[str, str, str]] = []
    settings: Optional[Settings] = None
    try:
        settings = _load(env_file)
        results.append(("configuration", "PASS", f"network={settings.hedera_network} account={settings.account_id}"))
    except ConfigError as e:
        results.append(("configuration", "FAIL", str(e)))

    if settings is None:
        for name in ("profile", "operator key", "model endpoint"):
            results.append((name, "SKIP", "configuration invalid"))
    else:
        try:
            p = build_profile(settings.agent_profile)
            results.append(("profile", "PASS", f"{p.id} ({p.mode}, {len(p.tools)} tools)"))
        except ConfigError as e:
            results.append(("profile", "FAIL", str(e)))
        try:
            parse_operator(settings)
            results.append(("operator key", "PASS", f"{settings.key_type} key parsed"))
        except ConfigError as e:
            results.append(("operator key", "FAIL", str(e)))
        r = preflight(settings)
        results.append(("model endpoint", "PASS" if r.ok else "FAIL", r.detail))

    for name, status, detail in results:
        typer.echo(f"[{status}] {name}: {detail}")
    failed = sum(1 for _, status, _ in results if status == "FAIL")
    passed = sum(1 for _, status, _ in results if status == "PASS")
    typer.echo(f"\n{passed}/{len(results)} checks passed")
    raise typer.Exit(code=1 if failed else 0)


if __name__ == "__main__":
    app()
