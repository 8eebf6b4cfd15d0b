from __future__ import annotations

from ..profiles import MODE_RETURN_BYTES, ProfileBase


class Profile(ProfileBase):
    """
    Human-in-the-loop profile: the agent only prepares transactions, and the
    CLI signs and submits them with the operator key afterwards.
    """
    id = "return_bytes"
    name = "Hedera Return Bytes Agent (human in the loop)"
    mode = MODE_RETURN_BYTES
    system_prompt = "You are a helpful assistant that prepares Hedera transactions for execution."
    tools = (
        "GET_HBAR_BALANCE_QUERY_TOOL",
        "TRANSFER_HBAR_TOOL",
        "CREATE_FUNGIBLE_TOKEN_TOOL",
    )
    banner = 'Hedera "Return Bytes" Agent CLI — type "exit" to quit'
    examples = (
        "prepare a transaction to send 5.5 hbar to 0.0.987",
        "get the bytes to create a token called 'My Wallet Token' with symbol 'MWT'",
        "what's my balance",
    )
