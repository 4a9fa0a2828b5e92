"""
llm_contracts — Verify LLM outputs against a JSON contract.

A deterministic rule engine that checks a facts document (the JSON
produced by a tool, debugger, or language model) against a
developer-authored contract and returns a pass/fail verdict with
every violation itemized.

Models produce the facts. Contracts decide whether they are acceptable.
"""

__version__ = "0.1.0"
