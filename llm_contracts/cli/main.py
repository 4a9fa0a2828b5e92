"""
llm_contracts CLI — Verify a facts document against a contract.

Stdout always carries exactly one verdict JSON document. The exit code
tells callers what kind of result it is:

    0  pass
    1  fail (one or more violations)
    2  invalid contract
    3  runtime / IO failure
"""

import argparse
import sys
from typing import Optional

from llm_contracts import __version__
from llm_contracts.core.errors import InvalidContractError, RuntimeFailure
from llm_contracts.core.logging import (
    LogChannel,
    configure_logging,
    get_current_config,
    get_logger,
)
from llm_contracts.verify.runner import run
from llm_contracts.verify.verdict import Verdict

EXIT_PASS = 0
EXIT_CONTRACT_FAILED = 1
EXIT_INVALID_CONTRACT = 2
EXIT_RUNTIME_IO = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="llm-contracts",
        description="Verify LLM outputs against a JSON contract",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"llm-contracts {__version__}",
    )
    parser.add_argument(
        "-c",
        "--contract",
        type=str,
        required=True,
        help="Path to the contract (.json, or .yaml/.yml)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        required=True,
        help="Path to the facts JSON to verify (use - for stdin)",
    )
    parser.add_argument(
        "--compact",
        action="store_true",
        help="Print the verdict on a single line instead of indented JSON",
    )

    # Logging configuration
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["silent", "info", "verbose", "debug"],
        default=None,
        help="Log verbosity level (default: info, or LLMC_LOG_LEVEL env var)",
    )
    parser.add_argument(
        "--log-format",
        type=str,
        choices=["console", "json"],
        default=None,
        help="Log output format (default: console, or LLMC_LOG_FORMAT env var)",
    )
    parser.add_argument(
        "--log-channel",
        type=str,
        default=None,
        help="Comma-separated log channels to show (loader,engine,system). Default: all",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    return run_verify(args)


def run_verify(args: argparse.Namespace) -> int:
    """Run one verification and print its verdict."""
    channels = None
    if args.log_channel:
        channels = [ch.strip() for ch in args.log_channel.split(",")]

    configure_logging(
        level=args.log_level,
        format=args.log_format,
        channels=channels,
        force=True,
    )
    log = get_logger(LogChannel.SYSTEM)
    log.debug("logging_configured", config=get_current_config())

    try:
        verdict = run(args.contract, args.output)
        exit_code = EXIT_PASS if verdict.passed else EXIT_CONTRACT_FAILED
    except InvalidContractError as e:
        verdict = Verdict.failure("invalid_contract", str(e))
        exit_code = EXIT_INVALID_CONTRACT
    except RuntimeFailure as e:
        verdict = Verdict.failure("runtime", str(e))
        exit_code = EXIT_RUNTIME_IO
    except Exception as e:
        log.error("unexpected_error", error=str(e), error_type=type(e).__name__)
        verdict = Verdict.failure("runtime", f"Unexpected error: {e}")
        exit_code = EXIT_RUNTIME_IO

    print(verdict.to_json(indent=None if args.compact else 2))
    return exit_code


def entrypoint() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    sys.exit(main())
