"""
Command-line entrypoint.

This script either:
- Evaluates one infix expression, given as argument or read from the console,
  and prints its postfix form and its value
- Evaluates a file (or archive) of expressions with worker processes
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, FilePath, ValidationError

from postfix_calculator.batch.runner import BatchRunner, build_output_path
from postfix_calculator.common.config import DEFAULT_SETTINGS, REFERENCE_SETTINGS, CalculatorSettings
from postfix_calculator.common.errors import CalculatorError
from postfix_calculator.common.logger import configure_logging
from postfix_calculator.common.parser import ExpressionParser

PROMPT = "Enter an infix expression: "


class CliArgs(BaseModel):
    """
    Pydantic model used to validate CLI arguments.

    Attributes
    ----------
    expression : Optional[str]
        Infix expression to evaluate; read from the console when omitted.
    file_path : Optional[FilePath]
        Path to a file or archive of expressions, one per line.
    reference_limits : bool
        Apply the historical 50-element stack and 80-token limits.
    verbose : bool
        Enable debug logging.
    """

    expression: Optional[str] = None
    file_path: Optional[FilePath] = None
    reference_limits: bool = False
    verbose: bool = False

    @property
    def settings(self) -> CalculatorSettings:
        return REFERENCE_SETTINGS if self.reference_limits else DEFAULT_SETTINGS


def parse_args(argv: Optional[List[str]] = None) -> CliArgs:
    """
    Parse and validate command-line arguments.

    :param Optional[List[str]] argv: Arguments, defaults to ``sys.argv[1:]``

    :return: Validated CLI arguments
    :rtype: CliArgs
    """
    parser = argparse.ArgumentParser(
        description="Convert an infix arithmetic expression to postfix and evaluate it"
    )
    parser.add_argument("expression", nargs="?", help="Infix expression, e.g. '(3+4)*2'")
    parser.add_argument("-f", "--file", dest="file_path", help="File or archive of expressions, one per line")
    parser.add_argument(
        "--reference-limits",
        action="store_true",
        help="Limit stacks to 50 elements and postfix sequences to 80 tokens",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)
    if args.expression is not None and args.file_path is not None:
        parser.error("an expression and --file cannot be combined")

    try:
        return CliArgs(**vars(args))
    except ValidationError as exc:
        parser.error(str(exc))


def run_expression(expression: str, settings: CalculatorSettings) -> int:
    """
    Evaluate one expression and print its postfix form and result.

    :return: Process exit status
    :rtype: int
    """
    try:
        evaluation = ExpressionParser.calculate(expression, settings)
    except CalculatorError as exc:
        print(f"[Error] {exc}")
        return 1

    print(f"Postfix expression: {evaluation.postfix_text()}")
    print(f"Result: {evaluation.result_text()}")
    return 0


def run_file(input_path: Path, settings: CalculatorSettings) -> int:
    """
    Evaluate every expression of a file and report where the results were written.

    :return: Process exit status
    :rtype: int
    """
    output_path = build_output_path(input_path)
    runner = BatchRunner(input_file=input_path, output_file=output_path, settings=settings)
    try:
        count = runner.run()
    except ValueError as exc:
        print(f"[Error] {exc}")
        return 1

    print(f"Evaluated {count} expressions, results written to {output_path}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function of the ``postfix-calculator`` command.
    """
    cli_args = parse_args(argv)
    configure_logging(logging.DEBUG if cli_args.verbose else logging.WARNING)

    if cli_args.file_path is not None:
        return run_file(Path(cli_args.file_path), cli_args.settings)

    expression = cli_args.expression
    if expression is None:
        try:
            expression = input(PROMPT)
        except EOFError:
            print("[Error] No expression")
            return 1

    return run_expression(expression, cli_args.settings)


if __name__ == "__main__":
    sys.exit(main())
