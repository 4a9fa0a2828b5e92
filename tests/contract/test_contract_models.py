"""
Tests for contract models.
"""

import re

import pytest
from pydantic import ValidationError

from llm_contracts.contract.models import (
    AllowedValuesRule,
    Contract,
    FieldTypeRule,
    MinItemsRule,
    NoEmptyRowsRule,
    OutputType,
    RegexRule,
    RequiredFieldRule,
    RuleScope,
    ValueType,
    compile_pattern,
)


class TestContractFields:
    """Tests for top-level contract metadata."""

    def test_metadata_is_parsed(self, basic_contract):
        """Name, version and inputs are stored as given."""
        contract = Contract.model_validate(basic_contract)

        assert contract.name == "people"
        assert contract.version == 1
        assert contract.inputs == ("prompt",)
        assert contract.output_type == OutputType.ARRAY

    def test_name_accepts_name_key(self):
        """`name` is accepted as an alias of `contract`."""
        contract = Contract.model_validate(
            {"name": "orders", "output_type": "object", "rules": []}
        )
        assert contract.name == "orders"

    def test_optional_metadata_defaults(self):
        """A minimal contract only needs output_type and rules."""
        contract = Contract.model_validate({"output_type": "object", "rules": []})

        assert contract.name is None
        assert contract.version is None
        assert contract.inputs == ()
        assert contract.rules == ()

    def test_unknown_top_level_keys_ignored(self):
        """Newer contracts with extra keys still load."""
        contract = Contract.model_validate(
            {"output_type": "array", "rules": [], "owner": "data-team"}
        )
        assert contract.output_type == OutputType.ARRAY

    def test_contract_is_frozen(self, basic_contract):
        """Loaded contracts cannot be modified."""
        contract = Contract.model_validate(basic_contract)

        with pytest.raises(ValidationError):
            contract.output_type = OutputType.OBJECT


class TestRuleVariants:
    """Tests for the rule tagged union."""

    def test_each_kind_maps_to_its_model(self):
        """The `rule` key selects the model."""
        contract = Contract.model_validate({
            "output_type": "array",
            "rules": [
                {"rule": "required_field", "field": "id"},
                {"rule": "field_type", "field": "id", "expected": "number"},
                {"rule": "allowed_values", "field": "status", "allowed": ["ok"]},
                {"rule": "regex", "field": "code", "pattern": "^[A-Z]{3}$"},
                {"rule": "min_items", "value": 1},
                {"rule": "no_empty_rows"},
            ],
        })

        kinds = [type(r) for r in contract.rules]
        assert kinds == [
            RequiredFieldRule,
            FieldTypeRule,
            AllowedValuesRule,
            RegexRule,
            MinItemsRule,
            NoEmptyRowsRule,
        ]
        assert contract.rule_kinds() == [
            "required_field",
            "field_type",
            "allowed_values",
            "regex",
            "min_items",
            "no_empty_rows",
        ]

    def test_field_type_expected_is_enum(self):
        rule = FieldTypeRule.model_validate(
            {"rule": "field_type", "field": "id", "expected": "boolean"}
        )
        assert rule.expected == ValueType.BOOLEAN

    def test_allowed_values_accepts_values_alias(self):
        """Older contracts spell the list `values`."""
        rule = AllowedValuesRule.model_validate(
            {"rule": "allowed_values", "field": "status", "values": ["ok", "accepted"]}
        )
        assert rule.allowed == ("ok", "accepted")

    def test_allowed_values_keeps_scalar_types(self):
        rule = AllowedValuesRule.model_validate(
            {"rule": "allowed_values", "field": "x", "allowed": [1, 2.5, True, None, "a"]}
        )
        assert rule.allowed == (1, 2.5, True, None, "a")
        assert type(rule.allowed[0]) is int
        assert type(rule.allowed[2]) is bool

    def test_regex_is_compiled_once(self):
        """The compiled matcher is stored on the rule."""
        rule = RegexRule.model_validate(
            {"rule": "regex", "field": "code", "pattern": "^[A-Z]{3}$"}
        )

        assert isinstance(rule.matcher, re.Pattern)
        assert rule.matcher is compile_pattern("^[A-Z]{3}$")
        assert rule.matcher.pattern == "^[A-Z]{3}$"

    def test_pattern_compiled_once_per_rule(self):
        compile_pattern.cache_clear()

        RegexRule.model_validate({"rule": "regex", "field": "code", "pattern": "^x+$"})

        info = compile_pattern.cache_info()
        assert info.misses == 1
        assert info.hits == 1

    def test_oversized_repetition_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            RegexRule.model_validate(
                {"rule": "regex", "field": "code", "pattern": "a{9999999999}"}
            )

        assert "invalid regular expression" in str(exc_info.value)

    def test_non_finite_float_rejected(self):
        with pytest.raises(ValidationError):
            AllowedValuesRule.model_validate(
                {"rule": "allowed_values", "field": "score", "allowed": [float("nan")]}
            )

    def test_invalid_regex_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            RegexRule.model_validate({"rule": "regex", "field": "code", "pattern": "(["})

        assert "invalid regular expression" in str(exc_info.value)


class TestRuleScopes:
    """Tests for document vs element rule scopes."""

    def test_min_items_is_document_scoped(self):
        assert MinItemsRule.scope == RuleScope.DOCUMENT

    @pytest.mark.parametrize("rule_cls", [
        RequiredFieldRule,
        FieldTypeRule,
        AllowedValuesRule,
        RegexRule,
        NoEmptyRowsRule,
    ])
    def test_other_rules_are_element_scoped(self, rule_cls):
        assert rule_cls.scope == RuleScope.ELEMENT

    def test_array_root_rules(self):
        assert MinItemsRule.array_root
        assert NoEmptyRowsRule.array_root
        assert not RequiredFieldRule.array_root
        assert not RegexRule.array_root

    def test_rules_by_scope_keeps_order(self):
        contract = Contract.model_validate({
            "output_type": "array",
            "rules": [
                {"rule": "no_empty_rows"},
                {"rule": "min_items", "value": 2},
                {"rule": "required_field", "field": "id"},
            ],
        })

        element_rules = contract.rules_by_scope(RuleScope.ELEMENT)
        document_rules = contract.rules_by_scope(RuleScope.DOCUMENT)

        assert [r.rule for r in element_rules] == ["no_empty_rows", "required_field"]
        assert [r.rule for r in document_rules] == ["min_items"]
