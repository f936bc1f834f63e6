"""Session control: statement dispatch, history, and import/export of definitions."""

from __future__ import annotations

import logging
from collections import deque
from pathlib import Path

from .config import HISTORY_LIMIT
from .context import Context
from .errors import SessionError, SessionExit
from .evaluator import evaluate_to_integer
from .function import Function
from .parser import parse_expression, parse_function_definition

logger = logging.getLogger(__name__)

HELP_TEXT = (
    "Syntax:\n"
    "FuncDefs: let [func name] [arg1] [arg2] ... = [expression]\n"
    "Calculation: [do | eval] [expression]\n"
    "FuncCall: [func name]([arg1],[arg2],...)\n"
    "Other: help, history, env, clear, import [file], export [file], exit"
)

_QUIT = {"quit", "exit"}
_HELP = {"help", "syntax"}
_ENV = {"env", "context"}
_EVAL_PREFIXES = ("eval ", "do ")


class Session:
    """Governs one interactive environment of named functions."""

    def __init__(self, *, max_depth: int | None = None, history_limit: int = HISTORY_LIMIT) -> None:
        self.functions: dict[str, Function] = {}
        self.history: deque[str] = deque(maxlen=history_limit)
        self.max_depth = max_depth
        # Resolved paths of imports still running, to stop import cycles.
        self._importing: set[Path] = set()

    @property
    def context(self) -> Context:
        return Context.from_functions(self.functions.values())

    def define(self, function: Function) -> Function:
        if function.name is None:
            raise SessionError("Cannot map anonymous function")
        if function.name in self.functions:
            logger.info("redefining %s", function.name)
        self.functions[function.name] = function
        return function

    def clear(self) -> None:
        self.functions.clear()

    def history_text(self) -> str:
        return "\n".join(f"[{n}] {stmt}" for n, stmt in enumerate(self.history, start=1))

    def env_text(self) -> str:
        return "\n".join(str(var) for var in self.context.values())

    def evaluate(self, source: str) -> int:
        return evaluate_to_integer(parse_expression(source), self.context, max_depth=self.max_depth)

    def export(self, path: str | Path) -> int:
        target = Path(path)
        source = self.context.source()
        try:
            target.write_text(source + "\n" if source else "", encoding="utf-8")
        except OSError as exc:
            raise SessionError(f"Could not write {str(target)!r}: {exc}") from exc
        logger.info("exported %d definitions to %s", len(self.functions), target)
        return len(self.functions)

    def import_file(self, path: str | Path) -> list[str]:
        source = Path(path)
        resolved = source.resolve()
        if resolved in self._importing:
            raise SessionError(f"Import cycle: {str(source)!r} is already being imported")
        try:
            lines = source.read_text(encoding="utf-8").splitlines()
        except OSError as exc:
            raise SessionError(f"Could not open {str(source)!r}: {exc}") from exc
        outputs = []
        self._importing.add(resolved)
        try:
            for line in lines:
                if not line.strip():
                    continue
                out = self.execute(line)
                if out is not None:
                    outputs.append(out)
        finally:
            self._importing.discard(resolved)
        logger.info("imported %s", source)
        return outputs

    def execute(self, line: str) -> str | None:
        """Run one statement and return the text to show, if any.

        Raises ``SessionExit`` for quit/exit; parse and evaluation errors
        propagate to the caller.
        """
        statement = line.strip()
        if not statement:
            return None
        self.history.append(statement)
        lowered = statement.lower()

        if lowered in _HELP:
            return HELP_TEXT
        if lowered in _QUIT:
            raise SessionExit()
        if lowered == "history":
            return self.history_text()
        if lowered == "clear":
            self.clear()
            return "Done"
        if lowered in _ENV:
            return self.env_text() or None

        command, _, argument = statement.partition(" ")
        if command.lower() in {"import", "export"}:
            argument = argument.strip()
            if not argument:
                raise SessionError(f"Missing file name for {command.lower()}")
            if command.lower() == "export":
                count = self.export(argument)
                return f"Exported {count} definitions"
            outputs = self.import_file(argument)
            return "\n".join(outputs) or None

        if lowered.startswith("let "):
            function = self.define(parse_function_definition(statement, self.context))
            logger.info("defined %s", function.name)
            return f"OK {function}"

        for prefix in _EVAL_PREFIXES:
            if lowered.startswith(prefix):
                statement = statement[len(prefix) :]
                break
        return str(self.evaluate(statement))
