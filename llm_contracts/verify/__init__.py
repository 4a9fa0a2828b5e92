"""
Verify — Evaluate facts against a loaded contract.
"""

from llm_contracts.verify.engine import RuleEngine, verify
from llm_contracts.verify.facts import json_type_name, parse_facts
from llm_contracts.verify.runner import run, verify_text
from llm_contracts.verify.verdict import Verdict, VerdictStatus, Violation

__all__ = [
    "RuleEngine",
    "Verdict",
    "VerdictStatus",
    "Violation",
    "json_type_name",
    "parse_facts",
    "run",
    "verify",
    "verify_text",
]
