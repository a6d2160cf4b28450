"""Interactive and file-mode driver for the Alone interpreter. Uses cmd as the shell backend."""

from __future__ import annotations

import cmd
import logging
import sys
from typing import Optional, TextIO

from alone.config import get_prompt
from alone.interpreter import Interpreter
from alone.types.errors import AloneError, EmptyInput, LexError, ParseError
from alone.types.value import to_string

logger = logging.getLogger(__name__)


def _span_line(source: str, start: int, end: int) -> tuple[str, int, int]:
    """Map a 1-based byte span onto (line text, column, width) for display."""
    data = source.encode("utf-8")
    before = data[: start - 1].decode("utf-8", errors="replace")
    width = len(data[start - 1: end - 1].decode("utf-8", errors="replace"))
    line_start = before.rfind("\n") + 1
    line_end = source.find("\n", line_start)
    line = source[line_start:] if line_end == -1 else source[line_start:line_end]
    return line, len(before) - line_start, max(width, 1)


def format_error(error: AloneError, source: Optional[str] = None) -> str:
    """Render an error, with a caret line under the offending span when known."""
    text = f"Error! {error}"
    span = getattr(error, "span", None)
    if source is None or span is None or not isinstance(error, (LexError, ParseError)):
        return text
    line, col, width = _span_line(source, span.start, span.end)
    return f"{text}\n  {line}\n  {' ' * col}{'^' * width}"


def run_source(interp: Interpreter, source: str, out: Optional[TextIO] = None, err: Optional[TextIO] = None) -> int:
    """Evaluate a whole program and print its final value. Returns an exit status."""
    out = out or sys.stdout
    err = err or sys.stderr
    try:
        result = interp.eval(source)
    except AloneError as e:
        print(format_error(e, source), file=err)
        return 1
    print(to_string(result), file=out)
    return 0


class Shell(cmd.Cmd):
    """Alone interpreter shell."""
    intro = "Alone: a small S-expression interpreter\nType 'help' for more information, Ctrl-D to exit."
    prompt = "Alone > "

    def __init__(self, interp: Optional[Interpreter] = None, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.interp = interp if interp is not None else Interpreter()
        self.prompt = get_prompt()

    def default(self, line):
        """Evaluates one line against the session environment."""
        try:
            result = self.interp.read_eval_line(line)
        except EmptyInput:
            return  # comment-only line, nothing to evaluate
        except AloneError as e:
            logger.debug("error evaluating %r", line, exc_info=True)
            print(format_error(e, line), file=sys.stderr)
            return
        print(to_string(result), file=self.stdout)

    def cmdloop(self, intro=None):
        """Like cmd.Cmd.cmdloop, but end of input is signalled out of band.

        cmd turns end of input into the line "EOF", which would make a typed
        `EOF` end the session; here only a real end of input calls do_EOF.
        """
        self.preloop()
        if intro is not None:
            self.intro = intro
        if self.intro:
            self.stdout.write(str(self.intro) + "\n")
        stop = None
        while not stop:
            line = self._read_line()
            stop = self.do_EOF("") if line is None else self.onecmd(line)
        self.postloop()

    def _read_line(self) -> Optional[str]:
        """Next input line without its terminator, or None at end of input."""
        if self.cmdqueue:
            return self.cmdqueue.pop(0)
        if self.use_rawinput:
            try:
                return input(self.prompt)
            except EOFError:
                return None
        self.stdout.write(self.prompt)
        self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            return None
        return line.rstrip("\r\n")

    def onecmd(self, line):
        # Every line is source code; bypass cmd's do_* dispatch
        if line.strip() == "help":
            return self.do_help("")
        if not line.strip():
            return self.emptyline()
        return self.default(line)

    def do_help(self, arg):
        """Prints a short intro instead of per-command docs."""
        print("Enter S-expressions such as (+ 1 2) or (define x 5).\n"
              "Builtins: print exit begin + - * / = eq < > <= >= ! not cons list car cdr.\n"
              "Definitions persist for the rest of the session.", file=self.stdout)

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return False

    def do_EOF(self, arg):
        """Exits interpreter."""
        print(file=self.stdout)
        return True
