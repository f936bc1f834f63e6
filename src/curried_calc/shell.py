"""Interactive mode for the calculator. Uses cmd as backend."""

from __future__ import annotations

import cmd
import logging

from .errors import CalcError, SessionExit
from .session import Session

logger = logging.getLogger(__name__)


class Shell(cmd.Cmd):
    """Curried calculator shell."""

    intro = "Started functional interpreter with new environment. Use quit or exit to end session"
    prompt = ">"

    def __init__(self, session: Session, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.session = session

    def default(self, line: str) -> bool:
        """Executes an arbitrary statement."""
        try:
            out = self.session.execute(line)
        except SessionExit:
            return True
        except CalcError as exc:
            logger.debug("statement %r failed", line, exc_info=True)
            print(exc, file=self.stdout)
            return False
        if out is not None:
            print(out, file=self.stdout)
        return False

    def do_help(self, arg: str) -> bool:
        """Shows the statement syntax instead of cmd's command listing."""
        return self.default("help")

    def emptyline(self) -> bool:
        """Do not repeat previous command on empty line."""
        return False

    def do_EOF(self, arg: str) -> bool:
        """Exits interpreter."""
        print(file=self.stdout)
        return True
