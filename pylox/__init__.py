from .errors import Diagnostic, LoxRuntimeError
from .interpreter import Interpreter
from .lox import Lox, Status
from .parser import parse
from .printer import AstPrinter
from .resolver import resolve
from .scanner import scan

__all__ = [
    "AstPrinter",
    "Diagnostic",
    "Interpreter",
    "Lox",
    "LoxRuntimeError",
    "Status",
    "parse",
    "resolve",
    "scan",
]
