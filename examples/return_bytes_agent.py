"""
Human-in-the-loop agent: the model only prepares unsigned transactions. This
script then signs and submits them with your key and prints the receipt.

Try:
  You: prepare a transaction to send 5.5 hbar to 0.0.987
  You: get the bytes to create a token called 'My Wallet Token' with symbol 'MWT'
  You: what's my balance        (a query: no transaction bytes are returned)
"""

from gaia_hedera_agent.cli import app

if __name__ == "__main__":
    app(args=["chat", "--profile", "return-bytes"])
