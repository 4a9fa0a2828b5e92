#!/usr/bin/env python3
"""
Contract Verification Example

Demonstrates the library API:
- Load a contract once
- Evaluate several facts documents with the same engine
- Print each verdict in its public JSON shape

Usage:
    python examples/verify_example.py
"""

import sys
from pathlib import Path

from llm_contracts.contract.loader import load_contract
from llm_contracts.verify.engine import RuleEngine
from llm_contracts.verify.facts import parse_facts

EXAMPLES_DIR = Path(__file__).parent


def main() -> int:
    contract = load_contract(EXAMPLES_DIR / "contracts" / "orders.json")
    engine = RuleEngine(contract)

    print("=" * 70)
    print(f"CONTRACT: {contract.name} ({len(contract.rules)} rules)")
    print("=" * 70)

    failed = 0
    for facts_path in sorted((EXAMPLES_DIR / "facts").glob("*.json")):
        verdict = engine.evaluate(parse_facts(facts_path.read_text()))
        print(f"\n[{verdict.status.value.upper()}] {facts_path.name}")
        for violation in verdict.violations:
            print(f"    {violation.rule}: {violation.message}")
        if not verdict.passed:
            failed += 1

    print()
    print(f"{failed} facts document(s) failed")
    return 0


if __name__ == "__main__":
    sys.exit(main())
