"""
Contract Models — Pydantic models for contracts and their rules.

A contract is metadata plus an ordered list of rule specifications.
Rules form a closed tagged union keyed by the `rule` field; the
loader validates raw JSON straight into these models.
"""

import re
from enum import Enum
from functools import lru_cache
from typing import Annotated, ClassVar, Literal, Optional, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    field_validator,
)


class OutputType(str, Enum):
    """Declared top-level shape of the facts document."""
    ARRAY = "array"
    OBJECT = "object"


class ValueType(str, Enum):
    """JSON value types a `field_type` rule can expect."""
    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    NULL = "null"


class RuleScope(str, Enum):
    """
    What a rule looks at.

    - DOCUMENT: the facts root as a whole (min_items)
    - ELEMENT: each element of an array root, or the root itself
      when it is not an array (unless the rule requires an array root)
    """
    DOCUMENT = "document"
    ELEMENT = "element"


@lru_cache(maxsize=None)
def compile_pattern(pattern: str) -> re.Pattern:
    """
    Compile a regex pattern, once per distinct pattern.

    Raises:
        ValueError: If the pattern does not compile
    """
    try:
        return re.compile(pattern)
    except (re.error, OverflowError, RecursionError) as e:
        raise ValueError(f"invalid regular expression {pattern!r}: {e}") from e


# JSON scalars an `allowed_values` rule may list.
Scalar = Union[StrictBool, StrictInt, StrictFloat, StrictStr, None]


# ============================================================================
# Rule Specifications
# ============================================================================

class RuleSpec(BaseModel):
    """Base for all rule specifications."""

    model_config = ConfigDict(frozen=True, extra="forbid", allow_inf_nan=False)

    scope: ClassVar[RuleScope] = RuleScope.ELEMENT
    # Rule only makes sense when the facts root is an array
    array_root: ClassVar[bool] = False


class RequiredFieldRule(RuleSpec):
    """Every element must hold `field` with a non-null value."""

    rule: Literal["required_field"]
    field: StrictStr = Field(..., description="Key that must be present")


class FieldTypeRule(RuleSpec):
    """When `field` is present, its JSON type must be `expected`."""

    rule: Literal["field_type"]
    field: StrictStr = Field(..., description="Key whose type is checked")
    expected: ValueType = Field(..., description="Required JSON type")


class AllowedValuesRule(RuleSpec):
    """When `field` holds a scalar, it must be one of `allowed`."""

    rule: Literal["allowed_values"]
    field: StrictStr = Field(..., description="Key whose value is checked")
    allowed: tuple[Scalar, ...] = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("allowed", "values"),
        description="Permitted scalar values, in contract order",
    )


class RegexRule(RuleSpec):
    """When `field` holds a string, the whole string must match `pattern`."""

    rule: Literal["regex"]
    field: StrictStr = Field(..., description="Key whose string value is matched")
    pattern: StrictStr = Field(..., description="Python regular expression")

    _matcher: re.Pattern = PrivateAttr()

    @field_validator("pattern")
    @classmethod
    def _pattern_compiles(cls, value: str) -> str:
        compile_pattern(value)
        return value

    def model_post_init(self, __context: object) -> None:
        self._matcher = compile_pattern(self.pattern)

    @property
    def matcher(self) -> re.Pattern:
        """The pattern, compiled once at load time."""
        return self._matcher


class MinItemsRule(RuleSpec):
    """The facts root must be an array of at least `value` elements."""

    scope: ClassVar[RuleScope] = RuleScope.DOCUMENT
    array_root: ClassVar[bool] = True

    rule: Literal["min_items"]
    value: StrictInt = Field(..., ge=0, description="Minimum array length")


class NoEmptyRowsRule(RuleSpec):
    """The facts root must be an array with no empty object, empty array or null element."""

    array_root: ClassVar[bool] = True

    rule: Literal["no_empty_rows"]


Rule = Annotated[
    Union[
        RequiredFieldRule,
        FieldTypeRule,
        AllowedValuesRule,
        RegexRule,
        MinItemsRule,
        NoEmptyRowsRule,
    ],
    Field(discriminator="rule"),
]


# ============================================================================
# Contract
# ============================================================================

class Contract(BaseModel):
    """
    A validated contract.

    Unknown top-level keys are ignored so that newer contracts still
    load. `inputs` and `output_type` are stored but never evaluated.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", allow_inf_nan=False)

    name: Optional[StrictStr] = Field(
        None,
        validation_alias=AliasChoices("contract", "name"),
        description="Informational contract identifier",
    )
    version: Optional[Annotated[StrictInt, Field(gt=0)]] = Field(
        None, description="Informational version, never enforced"
    )
    inputs: tuple[StrictStr, ...] = Field(default_factory=tuple, description="Declared inputs")
    output_type: OutputType = Field(..., description="Declared facts shape")
    rules: tuple[Rule, ...] = Field(..., description="Rules in reporting order")

    def rules_by_scope(self, scope: RuleScope) -> list[RuleSpec]:
        """Get rules of one scope, in contract order."""
        return [r for r in self.rules if r.scope == scope]

    def rule_kinds(self) -> list[str]:
        """Get the rule discriminators in contract order."""
        return [r.rule for r in self.rules]
