"""
Errors — Failure classes raised outside of rule evaluation.

Two families, never conflated:
- InvalidContractError: the contract itself is unusable (exit 2)
- RuntimeFailure: reading inputs or parsing facts failed (exit 3)

Rule violations are not errors. They are data, carried by the Verdict.
"""

from pathlib import Path
from typing import Iterable, Optional, Union


class LLMContractsError(Exception):
    """Base class for all llm_contracts failures."""


class InvalidContractError(LLMContractsError):
    """Contract failed to load: bad structure, unknown rule, bad regex, ..."""

    def __init__(self, message: str, problems: Optional[Iterable[str]] = None) -> None:
        self.problems: list[str] = list(problems or [])
        super().__init__(message)

    def __str__(self) -> str:
        base = super().__str__()
        if not self.problems:
            return base
        return f"{base}: " + "; ".join(self.problems)


class ContractParseError(InvalidContractError):
    """Contract text could not be decoded at all."""


class RuntimeFailure(LLMContractsError):
    """Anything that is neither a violation nor an invalid contract."""


class InputReadError(RuntimeFailure):
    """An input file is missing or unreadable."""

    def __init__(self, path: Union[str, Path], reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Cannot read {self.path}: {reason}")


class FactsError(RuntimeFailure):
    """Facts text is not a valid JSON document."""
