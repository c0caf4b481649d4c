"""LendingKit — a conversational agent for an Aave V3 USDC position on Base Sepolia."""

__version__ = "0.1.0"
