"""
Autonomous agent with the NFT tools enabled (collection creation and minting).

Try:
  You: I want to create an NFT collection. Call it 'Gaia Art' with the symbol 'GART'. Max supply 500.
  You: mint a new NFT for token 0.0.123789 with the metadata 'ipfs://Qm.../1.json'
  You: get the complete account info for 0.0.987
"""

from gaia_hedera_agent.cli import app

if __name__ == "__main__":
    app(args=["chat", "--profile", "nft"])
