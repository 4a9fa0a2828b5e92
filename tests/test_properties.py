"""
End-to-end properties of contract verification.
"""

import json

import pytest

from llm_contracts.contract.loader import load_contract_data
from llm_contracts.core.errors import InvalidContractError
from llm_contracts.verify.engine import verify
from llm_contracts.verify.runner import verify_text


RULES = [
    {"rule": "required_field", "field": "id"},
    {"rule": "field_type", "field": "id", "expected": "number"},
    {"rule": "allowed_values", "field": "status", "allowed": ["ok", "accepted"]},
    {"rule": "regex", "field": "code", "pattern": "^[A-Z]{3}$"},
    {"rule": "min_items", "value": 10},
    {"rule": "no_empty_rows"},
]

FACTS = [
    {"id": "7", "status": "pending", "code": "abc"},
    {},
    {"id": 2, "status": "ok", "code": "XYZ"},
    None,
]


def _contract(rules):
    return load_contract_data({"output_type": "array", "rules": rules})


@pytest.mark.parametrize("facts", [[], [{"a": 1}], [{}, None]])
def test_empty_rule_list_passes_arrays(facts):
    verdict = verify(_contract([]), facts)
    assert verdict.passed
    assert verdict.violations == ()


def test_empty_rule_list_passes_objects():
    contract = load_contract_data({"output_type": "object", "rules": []})
    assert verify(contract, {"anything": [1, 2, 3]}).passed


def test_idempotent():
    contract = _contract(RULES)
    assert verify(contract, FACTS).to_json() == verify(contract, FACTS).to_json()


def test_rule_permutation_keeps_membership():
    forward = verify(_contract(RULES), FACTS)
    backward = verify(_contract(list(reversed(RULES))), FACTS)

    def as_set(verdict):
        return {json.dumps(v.to_dict(), sort_keys=True) for v in verdict.violations}

    assert as_set(forward) == as_set(backward)
    assert [v.rule for v in forward.violations] != [v.rule for v in backward.violations]


def test_every_rule_contributes():
    """Nothing short-circuits: every rule reports against every row."""
    verdict = verify(_contract(RULES), FACTS)

    assert [v.rule for v in verdict.violations] == [
        "required_field",  # row 1 {}
        "required_field",  # row 3 null
        "field_type",      # row 0 "7"
        "allowed_values",  # row 0 pending
        "regex",           # row 0 abc
        "min_items",
        "no_empty_rows",   # row 1
        "no_empty_rows",   # row 3
    ]


def test_regex_examples():
    contract = json.dumps({
        "output_type": "array",
        "rules": [{"rule": "regex", "field": "code", "pattern": "^[A-Z]{3}$"}],
    })

    assert verify_text(contract, '[{"code": "ABC"}]').passed
    failing = verify_text(contract, '[{"code": "abc"}]')
    assert len(failing.violations) == 1
    assert failing.violations[0].actual == "abc"


def test_bad_regex_fails_regardless_of_facts():
    contract = json.dumps({
        "output_type": "array",
        "rules": [{"rule": "regex", "field": "code", "pattern": "(["}],
    })
    for facts in ("[]", '[{"code": "ABC"}]', "not even json"):
        with pytest.raises(InvalidContractError):
            verify_text(contract, facts)


def test_no_empty_rows_example():
    verdict = verify(_contract([{"rule": "no_empty_rows"}]), [{}, {"id": 1}])

    assert len(verdict.violations) == 1
    assert verdict.violations[0].message == "Row 0 is empty."
