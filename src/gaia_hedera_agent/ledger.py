# SPDX-License-Identifier: Apache-2.0
"""
Hedera client construction and transaction submission (hiero-sdk-python).

Two kinds of client exist at runtime:

- the toolkit client handed to the LangChain tools. In AUTONOMOUS mode it
  carries the operator key; in RETURN_BYTES mode it carries none and can only
  prepare transactions and run queries.
- the submitting client used by the human-in-the-loop hand-off. It always
  carries the operator key and signs/pays for the prepared bytes.

The SDK is imported lazily so configuration errors surface as ConfigError
before any network object is built.
"""

from __future__ import annotations

import asyncio
import enum
import logging
from typing import Any, Callable, NamedTuple, Optional

from .config import Settings
from .errors import ConfigError, SubmissionError
from .models import SubmissionReceipt

__all__ = ["Operator", "parse_operator", "build_client", "TransactionSubmitter"]

_LOG = logging.getLogger(__name__)


class Operator(NamedTuple):
    account_id: Any
    private_key: Any


def parse_operator(settings: Settings) -> Operator:
    """Parse ACCOUNT_ID / PRIVATE_KEY into SDK objects; any failure is fatal."""
    try:
        from hiero_sdk_python import AccountId, PrivateKey  # type: ignore
    except Exception as e:  # pragma: no cover
        raise ConfigError("Install `hiero-sdk-python`: `pip install hiero-sdk-python`.") from e

    try:
        account_id = AccountId.from_string(settings.account_id)
    except Exception as e:
        raise ConfigError(f"ACCOUNT_ID is not a valid Hedera account id: {e}") from e

    raw_key = settings.private_key.get_secret_value()
    parsers = {
        "ecdsa": PrivateKey.from_string_ecdsa,
        "ed25519": PrivateKey.from_string_ed25519,
        "der": PrivateKey.from_string_der,
    }
    try:
        private_key = parsers[settings.key_type](raw_key)
    except Exception as e:
        # Never echo the key material itself.
        raise ConfigError(
            f"PRIVATE_KEY could not be parsed as a {settings.key_type.upper()} key "
            f"({type(e).__name__})"
        ) from e
    return Operator(account_id, private_key)


def build_client(settings: Settings, operator: Optional[Operator] = None) -> Any:
    """Client for HEDERA_NETWORK, with the operator set when one is given."""
    try:
        from hiero_sdk_python import Client, Network  # type: ignore
    except Exception as e:  # pragma: no cover
        raise ConfigError("Install `hiero-sdk-python`: `pip install hiero-sdk-python`.") from e

    client = Client(Network(network=settings.hedera_network))
    if operator is not None:
        client.set_operator(operator.account_id, operator.private_key)
    _LOG.debug(
        "Hedera client ready",
        extra={"network": settings.hedera_network, "has_operator": operator is not None},
    )
    return client


def _transaction_from_bytes(raw: bytes) -> Any:
    from hiero_sdk_python.transaction.transaction import Transaction  # type: ignore
    return Transaction.from_bytes(raw)


def _status_text(status: Any) -> str:
    if isinstance(status, enum.Enum):
        return status.name
    if isinstance(status, int):
        try:
            from hiero_sdk_python.response_code import ResponseCode  # type: ignore
            return ResponseCode(status).name
        except Exception:
            return str(status)
    return str(status)


class TransactionSubmitter:
    """Decode prepared transaction bytes and execute them with a key-holding client."""

    def __init__(self, client: Any, *, decoder: Optional[Callable[[bytes], Any]] = None) -> None:
        self._client = client
        self._decode = decoder or _transaction_from_bytes

    async def submit(self, raw: bytes) -> SubmissionReceipt:
        """
        Execute ``raw`` and wait for the receipt.

        The SDK calls are blocking, so each runs once in a worker thread.
        A non-success status is returned, not raised; decode or transport
        failures raise SubmissionError.
        """
        try:
            tx = await asyncio.to_thread(self._decode, raw)
        except Exception as e:
            raise SubmissionError("decode", e) from e

        try:
            receipt = await asyncio.to_thread(tx.execute, self._client)
        except Exception as e:
            raise SubmissionError("submit", e) from e

        tx_id = getattr(receipt, "transaction_id", None) or getattr(tx, "transaction_id", None)
        result = SubmissionReceipt(
            status=_status_text(getattr(receipt, "status", None)),
            transaction_id=str(tx_id) if tx_id is not None else "unknown",
        )
        _LOG.info(
            "Transaction submitted",
            extra={"status": result.status, "transaction_id": result.transaction_id, "size": len(raw)},
        )
        return result
