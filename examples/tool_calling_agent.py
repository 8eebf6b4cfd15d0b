"""
Autonomous Hedera agent: tool calls made by the model are executed right away
with the operator key from your .env.

Requires GAIA_NODE_URL, GAIA_API_KEY, GAIA_MODEL_NAME, ACCOUNT_ID, PRIVATE_KEY.

Try:
  You: what is my hbar balance
  You: create a new topic for our project updates
  You: send 10 hbar to account 0.0.987
"""

from gaia_hedera_agent.cli import app

if __name__ == "__main__":
    app(args=["chat", "--profile", "tool-calling"])
