from __future__ import annotations

from ..profiles import MODE_AUTONOMOUS, ProfileBase


class Profile(ProfileBase):
    id = "tool_calling"
    name = "Hedera Agent (autonomous)"
    mode = MODE_AUTONOMOUS
    system_prompt = "You are a helpful assistant that can interact with the Hedera blockchain."
    # Restricted to tools whose schemas Gaia-hosted models handle reliably.
    tools = (
        "GET_HBAR_BALANCE_QUERY_TOOL",
        "GET_ACCOUNT_TOKEN_BALANCES_QUERY_TOOL",
        "TRANSFER_HBAR_TOOL",
        "CREATE_TOPIC_TOOL",
        "SUBMIT_TOPIC_MESSAGE_TOOL",
        "CREATE_FUNGIBLE_TOKEN_TOOL",
        "MINT_FUNGIBLE_TOKEN_TOOL",
    )
    banner = 'Hedera Agent CLI Chatbot — type "exit" to quit'
    examples = (
        "what is my hbar balance",
        "create a new topic for our project updates",
        "submit 'hello world' to topic 0.0.123456",
        "create a fungible token called 'Starter Token' with symbol 'STK' and an initial supply of 10000",
        "send 10 hbar to account 0.0.987",
    )
