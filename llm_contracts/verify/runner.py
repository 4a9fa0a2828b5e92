"""
Runner — Read inputs, load the contract, evaluate the facts.

The contract is always loaded before the facts are read, so an invalid
contract is reported as such whatever state the facts file is in.
"""

import sys
from pathlib import Path
from typing import Union

from llm_contracts.contract.loader import load_contract, parse_contract
from llm_contracts.core.errors import InputReadError, LLMContractsError
from llm_contracts.core.logging import RunLogger, clear_run_context
from llm_contracts.verify.engine import RuleEngine
from llm_contracts.verify.facts import parse_facts
from llm_contracts.verify.verdict import Verdict

STDIN = "-"


def read_facts_text(path: Union[str, Path]) -> str:
    """Read facts from a file, or from stdin when path is '-'."""
    if str(path) == STDIN:
        return sys.stdin.read()
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InputReadError(path, str(e)) from e


def run(contract_path: Union[str, Path], facts_path: Union[str, Path]) -> Verdict:
    """
    Verify a facts file against a contract file.

    Args:
        contract_path: Path to the contract
        facts_path: Path to the facts document ('-' for stdin)

    Returns:
        Verdict (pass or fail)

    Raises:
        InvalidContractError: If the contract does not load
        RuntimeFailure: If an input cannot be read or the facts are not JSON
    """
    rlog = RunLogger(contract_path=str(contract_path), facts_path=str(facts_path))
    stage = "load_contract"
    try:
        rlog.stage_start(stage)
        contract = load_contract(contract_path)
        rlog.stage_end(stage, rules=len(contract.rules))

        stage = "parse_facts"
        rlog.stage_start(stage)
        facts = parse_facts(read_facts_text(facts_path))
        rlog.stage_end(stage)

        stage = "evaluate"
        rlog.stage_start(stage)
        verdict = RuleEngine(contract).evaluate(facts)
        rlog.stage_end(stage, violations=len(verdict.violations))

        rlog.run_complete(verdict.status.value, violations=len(verdict.violations))
    except LLMContractsError as e:
        rlog.stage_error(stage, e)
        raise
    finally:
        clear_run_context()

    return verdict


def verify_text(contract_text: str, facts_text: str) -> Verdict:
    """Verify in-memory facts JSON against in-memory contract JSON."""
    contract = parse_contract(contract_text)
    facts = parse_facts(facts_text)
    return RuleEngine(contract).evaluate(facts)
