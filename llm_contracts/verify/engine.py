"""
Rule Engine — Deterministic contract evaluation.

Every rule is evaluated against every applicable element, and every
violation is collected. Nothing short-circuits.

Ordering is fixed: violations follow contract rule order, then row
order within a rule. The same contract and facts always produce the
same verdict.

Matching policy:
- DOCUMENT rules (min_items) look at the facts root as a whole.
- ELEMENT rules look at each element of an array root. Any other root
  is treated as a single element with no row index.
- Rules that require an array root (min_items, no_empty_rows) report a
  non-array root once instead of evaluating it.
"""

from typing import Any, Iterator, Optional

from llm_contracts.contract.models import (
    AllowedValuesRule,
    Contract,
    FieldTypeRule,
    MinItemsRule,
    NoEmptyRowsRule,
    RegexRule,
    RequiredFieldRule,
    RuleScope,
    RuleSpec,
)
from llm_contracts.core.logging import LogChannel, get_logger
from llm_contracts.verify.facts import is_empty_row, is_scalar, json_equal, json_type_name
from llm_contracts.verify.verdict import Verdict, Violation

log = get_logger(LogChannel.ENGINE)


def _iter_elements(facts: Any) -> Iterator[tuple[Optional[int], Any]]:
    """Yield (row_index, element); the index is None for a non-array root."""
    if isinstance(facts, list):
        yield from enumerate(facts)
    else:
        yield None, facts


def _element_label(index: Optional[int]) -> str:
    return f"Row {index}" if index is not None else "Facts root"


def _field_label(field: str, index: Optional[int]) -> str:
    if index is None:
        return f"Field '{field}'"
    return f"Row {index} field '{field}'"


def _array_root_violation(rule: RuleSpec, facts: Any) -> Violation:
    expected: Any = "array"
    if isinstance(rule, MinItemsRule):
        expected = rule.value
    return Violation(
        rule=rule.rule,
        field="",
        message=f"{rule.rule} requires a top-level array.",
        expected=expected,
        actual=json_type_name(facts),
    )


class RuleEngine:
    """
    Evaluates a validated contract against facts documents.

    The engine holds only the (immutable) contract, so one instance can
    evaluate any number of facts documents, from any number of threads.
    """

    def __init__(self, contract: Contract) -> None:
        self._contract = contract

    @property
    def contract(self) -> Contract:
        return self._contract

    def evaluate(self, facts: Any) -> Verdict:
        """
        Evaluate every rule against the facts.

        Args:
            facts: Decoded JSON value (never mutated)

        Returns:
            Verdict with all violations in contract rule order
        """
        violations: list[Violation] = []

        for position, rule in enumerate(self._contract.rules):
            found = self.check_rule(rule, facts)
            log.verbose(
                "rule_evaluated",
                position=position,
                rule=rule.rule,
                violations=len(found),
            )
            for violation in found:
                log.debug("violation_found", **violation.to_dict())
            violations.extend(found)

        verdict = Verdict.from_violations(violations)
        log.info(
            "evaluation_complete",
            contract=self._contract.name,
            status=verdict.status.value,
            violations=len(verdict.violations),
        )
        return verdict

    def check_rule(self, rule: RuleSpec, facts: Any) -> list[Violation]:
        """Evaluate a single rule against the facts."""
        if rule.array_root and not isinstance(facts, list):
            return [_array_root_violation(rule, facts)]
        if rule.scope == RuleScope.DOCUMENT:
            return self._check_document(rule, facts)

        violations: list[Violation] = []
        for index, element in _iter_elements(facts):
            violations.extend(self._check_element(rule, element, index))
        return violations

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    def _check_document(self, rule: RuleSpec, facts: Any) -> list[Violation]:
        if isinstance(rule, MinItemsRule):
            return self._check_min_items(rule, facts)
        raise TypeError(f"Unhandled document rule: {rule.rule}")

    def _check_element(
        self, rule: RuleSpec, element: Any, index: Optional[int]
    ) -> list[Violation]:
        if isinstance(rule, RequiredFieldRule):
            return self._check_required_field(rule, element, index)
        if isinstance(rule, FieldTypeRule):
            return self._check_field_type(rule, element, index)
        if isinstance(rule, AllowedValuesRule):
            return self._check_allowed_values(rule, element, index)
        if isinstance(rule, RegexRule):
            return self._check_regex(rule, element, index)
        if isinstance(rule, NoEmptyRowsRule):
            return self._check_no_empty_rows(rule, element, index)
        raise TypeError(f"Unhandled element rule: {rule.rule}")

    # -------------------------------------------------------------------------
    # Element rules
    # -------------------------------------------------------------------------

    def _check_required_field(
        self, rule: RequiredFieldRule, element: Any, index: Optional[int]
    ) -> list[Violation]:
        if not isinstance(element, dict):
            message = f"{_element_label(index)} is not an object."
        elif rule.field not in element:
            if index is None:
                message = f"Missing required field '{rule.field}'."
            else:
                message = f"Row {index} is missing required field '{rule.field}'."
        elif element[rule.field] is None:
            message = f"{_field_label(rule.field, index)} is null."
        else:
            return []

        return [Violation(rule=rule.rule, field=rule.field, message=message)]

    def _check_field_type(
        self, rule: FieldTypeRule, element: Any, index: Optional[int]
    ) -> list[Violation]:
        # Absent fields are required_field's business
        if not isinstance(element, dict) or rule.field not in element:
            return []

        expected = rule.expected.value
        actual = json_type_name(element[rule.field])
        if actual == expected:
            return []

        return [Violation(
            rule=rule.rule,
            field=rule.field,
            message=(
                f"{_field_label(rule.field, index)} expected type "
                f"'{expected}', got '{actual}'."
            ),
            expected=expected,
            actual=actual,
        )]

    def _check_allowed_values(
        self, rule: AllowedValuesRule, element: Any, index: Optional[int]
    ) -> list[Violation]:
        if not isinstance(element, dict) or rule.field not in element:
            return []

        value = element[rule.field]
        if not is_scalar(value):
            return []
        if any(json_equal(value, allowed) for allowed in rule.allowed):
            return []

        return [Violation(
            rule=rule.rule,
            field=rule.field,
            message=f"{_field_label(rule.field, index)} has a disallowed value.",
            expected=list(rule.allowed),
            actual=value,
        )]

    def _check_regex(
        self, rule: RegexRule, element: Any, index: Optional[int]
    ) -> list[Violation]:
        if not isinstance(element, dict):
            return []

        value = element.get(rule.field)
        if not isinstance(value, str):
            return []
        if rule.matcher.fullmatch(value):
            return []

        return [Violation(
            rule=rule.rule,
            field=rule.field,
            message=f"{_field_label(rule.field, index)} does not match regex pattern.",
            expected=rule.pattern,
            actual=value,
        )]

    def _check_no_empty_rows(
        self, rule: NoEmptyRowsRule, element: Any, index: Optional[int]
    ) -> list[Violation]:
        if not is_empty_row(element):
            return []
        return [Violation(
            rule=rule.rule,
            field="",
            message=f"{_element_label(index)} is empty.",
        )]

    # -------------------------------------------------------------------------
    # Document rules
    # -------------------------------------------------------------------------

    def _check_min_items(self, rule: MinItemsRule, facts: list) -> list[Violation]:
        count = len(facts)
        if count >= rule.value:
            return []

        return [Violation(
            rule=rule.rule,
            field="",
            message=(
                f"Top-level array must contain at least {rule.value} items, "
                f"found {count}."
            ),
            expected=rule.value,
            actual=count,
        )]


def verify(contract: Contract, facts: Any) -> Verdict:
    """Evaluate a contract against facts in one call."""
    return RuleEngine(contract).evaluate(facts)
