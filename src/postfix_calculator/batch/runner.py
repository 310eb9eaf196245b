"""Evaluate a file of expressions using worker processes."""
from multiprocessing import Pipe, Process, cpu_count
from multiprocessing.connection import Connection
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO, Tuple

from pydantic import BaseModel, ConfigDict, Field

from postfix_calculator.batch.reader import read_expressions
from postfix_calculator.batch.worker import ExpressionWorker
from postfix_calculator.common.config import DEFAULT_SETTINGS, CalculatorSettings
from postfix_calculator.common.logger import logger


def build_output_path(input_path: Path) -> Path:
    """
    Construct an output file path based on the input file.

    - Preserves the original folder
    - Replaces dots in extensions with underscores
    - Appends '_results.txt' at the end

    Examples
    --------
    input: resources/expressions.tar.xz
    output: resources/expressions_tar_xz_results.txt

    :param Path input_path: Path to the input file
    :return: Path to the output file
    """
    suffix_safe = "".join(input_path.suffixes).replace(".", "_")
    stem = input_path.name[: len(input_path.name) - len("".join(input_path.suffixes))]
    return input_path.with_name(f"{stem}{suffix_safe}_results.txt")


def format_payload(payload: Dict[str, Any]) -> str:
    """
    Format a worker payload as one output line.

    :param dict payload: Message received from an ExpressionWorker

    :return: ``<expr> = <result> [<postfix>]`` or ``<expr> -> ERROR: <message>``
    :rtype: str
    """
    if "result" in payload:
        return f"{payload['expression']} = {payload['result']:.3f} [{payload['postfix']}]"
    return f"{payload['expression']} -> ERROR: {payload['error']}"


class BatchRunner(BaseModel):
    """
    Evaluate every expression of an input file and write one result line per expression.

    Features:
        - Spawns one worker process per expression.
        - Writes results immediately to disk as soon as a worker finishes.
        - Ensures each worker is destroyed immediately after finishing.
        - Handles multiple simultaneous workers up to CPU core count.
    """

    model_config = ConfigDict(frozen=True)

    input_file: Path = Field(..., description="Path to a .txt file or archive of expressions")
    output_file: Path = Field(..., description="Path to write computation results")
    max_workers: Optional[int] = Field(default=None, ge=1, description="Worker limit, defaults to the CPU count")
    settings: CalculatorSettings = Field(default=DEFAULT_SETTINGS, description="Stack and token limits")

    def _spawn_worker(self, expr: str, line_number: int) -> Tuple[Process, Connection, str]:
        """
        Spawn an ExpressionWorker for the given expression and return process, pipe and expression.

        :param str expr: Infix expression
        :param int line_number: Line number of expression in input

        :return: Tuple of (Process, parent_pipe, expression)
        :rtype: Tuple[Process, Connection, str]
        """
        parent_conn, child_conn = Pipe()
        worker = ExpressionWorker(
            conn=child_conn, expression=expr, line_number=line_number, settings=self.settings
        )
        process = Process(target=worker.run)
        process.start()
        # The child owns its end of the pipe now
        child_conn.close()
        return process, parent_conn, expr

    def _collect_finished_workers(
        self, active_workers: List[Tuple[Process, Connection, str]], f_out: TextIO
    ) -> int:
        """
        Collect results from all workers that have sent their payload and write them to the output file.

        A worker that exits without sending a payload is reported as an error line.
        Finished workers are removed from the active_workers list.

        :param list active_workers: List of tuples (Process, Pipe, expression)
        :param TextIO f_out: Open file handle for writing results

        :return: Number of workers collected
        :rtype: int
        """
        collected = 0
        # Iterate in reverse to safely remove finished workers while iterating
        for i in reversed(range(len(active_workers))):
            proc, pipe_conn, expr = active_workers[i]
            if pipe_conn.poll(0.01):
                try:
                    payload = pipe_conn.recv()
                except EOFError:
                    # The child closed its end of the pipe without sending anything
                    payload = None
                pipe_conn.close()
                proc.join()
                if payload is None:
                    logger.error(f"👷❌ Worker for {expr!r} exited with code {proc.exitcode} without a result")
                    payload = {"expression": expr, "error": f"worker exited with code {proc.exitcode}"}
                active_workers.pop(i)
                collected += 1

                f_out.write(format_payload(payload) + "\n")
                f_out.flush()
        return collected

    def run(self) -> int:
        """
        Evaluate all expressions of the input file.

        Steps:
            1. Read expressions from the input file or archive.
            2. Spawn worker processes for each expression, respecting the worker limit.
            3. Write results to the output file as soon as a worker finishes.

        :return: Number of expressions evaluated
        :rtype: int
        """
        expressions: List[str] = read_expressions(self.input_file)
        logger.info(f"📂 Read {len(expressions)} expressions from {self.input_file}")

        with self.output_file.open("w", encoding="utf-8") as f_out:
            if not expressions:
                return 0

            max_workers: int = min(self.max_workers or cpu_count(), len(expressions))
            active_workers: List[Tuple[Process, Connection, str]] = []

            for line_number, expr in enumerate(expressions, start=1):
                # Wait until a worker slot is available
                while len(active_workers) >= max_workers:
                    self._collect_finished_workers(active_workers, f_out)

                active_workers.append(self._spawn_worker(expr, line_number))

            # Collect remaining active workers
            while active_workers:
                self._collect_finished_workers(active_workers, f_out)

        logger.info(f"📝 Results written to {self.output_file}")
        return len(expressions)
