"""
Contract Loader — Parse and validate contracts.

Contracts are JSON documents. Files ending in .yaml/.yml are also
accepted since YAML is a superset of JSON.

Validation happens entirely here: a contract that loads is safe to
evaluate. Anything wrong with it (missing keys, unknown rule kinds,
wrong types, bad regex, empty allowed lists) is reported as an
InvalidContractError before any facts are looked at.
"""

import json
from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import ValidationError

from llm_contracts.contract.models import Contract
from llm_contracts.core.errors import (
    ContractParseError,
    InputReadError,
    InvalidContractError,
)
from llm_contracts.core.logging import LogChannel, get_logger

YAML_SUFFIXES = {".yaml", ".yml"}

log = get_logger(LogChannel.LOADER)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def load_contract(path: Union[str, Path]) -> Contract:
    """
    Load a contract from a file.

    Args:
        path: Path to a .json (or .yaml/.yml) contract file

    Returns:
        Validated Contract

    Raises:
        InputReadError: If the file cannot be read
        InvalidContractError: If the contract is invalid
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InputReadError(path, str(e)) from e

    log.verbose("contract_read", path=str(path), size=len(text))

    if path.suffix.lower() in YAML_SUFFIXES:
        return parse_contract_yaml(text)
    return parse_contract(text)


def parse_contract(text: str) -> Contract:
    """Parse and validate contract JSON text."""
    try:
        data = json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:
        log.warning("contract_rejected", reason="invalid_json", error=str(e))
        raise ContractParseError("Invalid contract JSON", [str(e)]) from e
    return load_contract_data(data)


def parse_contract_yaml(text: str) -> Contract:
    """Parse and validate contract YAML text."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        log.warning("contract_rejected", reason="invalid_yaml", error=str(e))
        raise ContractParseError("Invalid contract YAML", [str(e)]) from e
    return load_contract_data(data)


def load_contract_data(data: Any) -> Contract:
    """
    Validate an already-decoded contract value.

    No partial contract is ever returned: either every rule is valid
    or the whole contract is rejected.
    """
    if not isinstance(data, dict):
        problem = f"contract must be a JSON object, got {type(data).__name__}"
        log.warning("contract_rejected", reason="not_an_object")
        raise InvalidContractError("Invalid contract", [problem])

    try:
        contract = Contract.model_validate(data)
    except ValidationError as e:
        problems = format_validation_errors(e)
        log.warning("contract_rejected", reason="invalid_structure", problems=len(problems))
        raise InvalidContractError("Invalid contract", problems) from e

    log.info(
        "contract_loaded",
        contract=contract.name,
        rules=len(contract.rules),
        output_type=contract.output_type.value,
    )
    return contract


def format_validation_errors(error: ValidationError) -> list[str]:
    """Render pydantic errors as 'rules.2.pattern: message' lines."""
    problems = []
    for err in error.errors():
        location = ".".join(str(part) for part in err["loc"]) or "contract"
        problems.append(f"{location}: {err['msg']}")
    return problems
