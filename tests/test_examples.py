"""
Tests for the bundled example contracts and facts.
"""

from pathlib import Path

from llm_contracts.contract.loader import load_contract
from llm_contracts.verify.runner import run

EXAMPLES_DIR = Path(__file__).parent.parent / "examples"
CONTRACT = EXAMPLES_DIR / "contracts" / "orders.json"


def test_json_and_yaml_contracts_agree():
    json_contract = load_contract(EXAMPLES_DIR / "contracts" / "orders.json")
    yaml_contract = load_contract(EXAMPLES_DIR / "contracts" / "orders.yaml")

    assert json_contract.model_dump() == yaml_contract.model_dump()


def test_good_facts_pass():
    assert run(CONTRACT, EXAMPLES_DIR / "facts" / "orders_good.json").passed


def test_bad_facts_report_every_violation():
    verdict = run(CONTRACT, EXAMPLES_DIR / "facts" / "orders_bad.json")

    assert [(v.rule, v.field) for v in verdict.violations] == [
        ("required_field", "order_id"),
        ("field_type", "order_id"),
        ("allowed_values", "status"),
        ("regex", "currency"),
        ("no_empty_rows", ""),
    ]
