"""
Contract — Models and loader for developer-authored contracts.

A contract that loads is a contract that can be evaluated.
"""

from llm_contracts.contract.models import (
    AllowedValuesRule,
    Contract,
    FieldTypeRule,
    MinItemsRule,
    NoEmptyRowsRule,
    OutputType,
    RegexRule,
    RequiredFieldRule,
    Rule,
    RuleScope,
    RuleSpec,
    ValueType,
)
from llm_contracts.contract.loader import (
    load_contract,
    load_contract_data,
    parse_contract,
    parse_contract_yaml,
)

__all__ = [
    "AllowedValuesRule",
    "Contract",
    "FieldTypeRule",
    "MinItemsRule",
    "NoEmptyRowsRule",
    "OutputType",
    "RegexRule",
    "RequiredFieldRule",
    "Rule",
    "RuleScope",
    "RuleSpec",
    "ValueType",
    "load_contract",
    "load_contract_data",
    "parse_contract",
    "parse_contract_yaml",
]
