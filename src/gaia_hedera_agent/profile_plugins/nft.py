from __future__ import annotations

from ..profiles import MODE_AUTONOMOUS, ProfileBase


class Profile(ProfileBase):
    id = "nft"
    name = "Hedera NFT Agent (autonomous)"
    mode = MODE_AUTONOMOUS
    system_prompt = "You are a helpful assistant with advanced Hedera capabilities, including NFTs."
    # Everything except airdrops, which the hosted models cannot call correctly.
    tools = (
        "CREATE_FUNGIBLE_TOKEN_TOOL",
        "CREATE_NON_FUNGIBLE_TOKEN_TOOL",
        "MINT_NON_FUNGIBLE_TOKEN_TOOL",
        "TRANSFER_HBAR_TOOL",
        "CREATE_TOPIC_TOOL",
        "SUBMIT_TOPIC_MESSAGE_TOOL",
        "GET_HBAR_BALANCE_QUERY_TOOL",
        "GET_ACCOUNT_QUERY_TOOL",
        "GET_ACCOUNT_TOKEN_BALANCES_QUERY_TOOL",
        "GET_TOPIC_MESSAGES_QUERY_TOOL",
        "MINT_FUNGIBLE_TOKEN_TOOL",
    )
    banner = 'Hedera NFT Agent CLI — type "exit" to quit'
    examples = (
        "create an NFT collection called 'Gaia Art' with the symbol 'GART' and a max supply of 500",
        "mint a new NFT for token 0.0.123789 with the metadata 'ipfs://Qm.../1.json'",
        "get the complete account info for 0.0.987",
        "what are the token balances for account 0.0.123789",
    )
