"""CLI — the llm-contracts command."""
