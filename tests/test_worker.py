"""Unit tests for ExpressionWorker using real Pipe connections."""
from multiprocessing import Pipe

import pytest

from postfix_calculator.batch.worker import ExpressionWorker
from postfix_calculator.common.config import CalculatorSettings
from postfix_calculator.common.parser import ExpressionParser


@pytest.mark.parametrize(
    "expr,expected,postfix",
    [
        ("2 + 3", 5.0, "2 3 +"),
        ("10 - 4", 6.0, "10 4 -"),
        ("(1+2)*4", 12.0, "1 2 + 4 *"),
        ("8 / 2", 4.0, "8 2 /"),
    ],
)
def test_worker_sends_result_for_valid_expression(expr: str, expected: float, postfix: str) -> None:
    """Worker sends computed result and postfix form through the connection for valid expressions."""
    parent_conn, child_conn = Pipe()
    worker = ExpressionWorker(conn=child_conn, expression=expr, line_number=1)
    worker.run()

    msg = parent_conn.recv()
    assert msg["line"] == 1
    assert msg["expression"] == expr
    assert msg["result"] == expected
    assert msg["postfix"] == postfix
    assert "error" not in msg


@pytest.mark.parametrize(
    "expr",
    [
        "2 +",         # Trailing operator
        "3 4",         # Extra operand remaining
        "(1+2",        # Unbalanced brackets
        "3 & 4",       # Invalid token
    ],
)
def test_worker_sends_error_for_invalid_expression(expr: str) -> None:
    """Worker sends an error message for malformed arithmetic expressions."""
    parent_conn, child_conn = Pipe()
    worker = ExpressionWorker(conn=child_conn, expression=expr, line_number=2)
    worker.run()

    msg = parent_conn.recv()
    assert msg["line"] == 2
    assert msg["expression"] == expr
    assert "error" in msg
    assert isinstance(msg["error"], str)


def test_worker_applies_settings() -> None:
    """Configured limits are enforced inside the worker."""
    parent_conn, child_conn = Pipe()
    worker = ExpressionWorker(
        conn=child_conn,
        expression="1+2+3",
        line_number=3,
        settings=CalculatorSettings(max_tokens=3),
    )
    worker.run()

    msg = parent_conn.recv()
    assert "too long" in msg["error"]


def test_worker_rejects_empty_expression() -> None:
    """Pydantic validation prevents creating ExpressionWorker with empty expression."""
    _, child_conn = Pipe()
    with pytest.raises(ValueError):
        ExpressionWorker(conn=child_conn, expression="  ", line_number=1)


def test_worker_rejects_invalid_line_number() -> None:
    """Line numbers start at 1."""
    _, child_conn = Pipe()
    with pytest.raises(ValueError):
        ExpressionWorker(conn=child_conn, expression="1+1", line_number=0)


def test_worker_reports_unexpected_errors(monkeypatch) -> None:
    """Errors outside the calculator taxonomy are still sent back instead of killing the worker silently."""

    def fail(expression, settings=None):
        raise RuntimeError("boom")

    monkeypatch.setattr(ExpressionParser, "calculate", staticmethod(fail))

    parent_conn, child_conn = Pipe()
    worker = ExpressionWorker(conn=child_conn, expression="1+1", line_number=4)
    worker.run()

    msg = parent_conn.recv()
    assert msg["line"] == 4
    assert msg["error"] == "boom"
