import sys
from enum import Enum

from .errors import LoxRuntimeError
from .interpreter import Interpreter
from .parser import parse
from .resolver import resolve
from .scanner import scan


# Each Lox call takes about five Python frames.
RECURSION_LIMIT = 20000


class Status(Enum):
    OK = 0
    STATIC_ERROR = 65
    RUNTIME_ERROR = 70


class Lox:
    """Runs source text through scanning, parsing, resolution and execution.

    Each phase hands back its own diagnostics; a phase only runs when the
    ones before it reported none. The interpreter, and with it every
    global defined so far, is kept between calls to ``run()``.
    """

    def __init__(self, out=None, err=None):
        self.err = err
        self.interpreter = Interpreter(out)
        if sys.getrecursionlimit() < RECURSION_LIMIT:
            sys.setrecursionlimit(RECURSION_LIMIT)

    def run(self, source):
        tokens, diagnostics = scan(source)
        statements, parse_diagnostics = parse(tokens)
        diagnostics += parse_diagnostics
        if diagnostics:
            return self.report(diagnostics)

        bindings, diagnostics = resolve(statements)
        if diagnostics:
            return self.report(diagnostics)

        self.interpreter.resolve(bindings)
        try:
            self.interpreter.interpret(statements)
        except LoxRuntimeError as error:
            print(error, file=self.err or sys.stderr)
            return Status.RUNTIME_ERROR
        return Status.OK

    def report(self, diagnostics):
        for diagnostic in diagnostics:
            print(diagnostic, file=self.err or sys.stderr)
        return Status.STATIC_ERROR
