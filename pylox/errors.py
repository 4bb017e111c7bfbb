from dataclasses import dataclass

from .tokens import Token, TokenType


@dataclass(frozen=True)
class Diagnostic:
    """A static (lexical, syntax or resolution) error.

    ``where`` is the context fragment placed after ``Error``: empty,
    ``" at end"`` or ``" at '<lexeme>'"``.
    """

    line: int
    where: str
    message: str

    @classmethod
    def at(cls, token: Token, message: str) -> "Diagnostic":
        if token.type == TokenType.EOF:
            return cls(token.line, " at end", message)
        return cls(token.line, f" at '{token.lexeme}'", message)

    def __str__(self):
        return f"[line {self.line}] Error{self.where}: {self.message}"


class ParseError(RuntimeError):
    pass


class LoxRuntimeError(RuntimeError):
    def __init__(self, token, message):
        super().__init__(message)
        self.token = token
        self.message = message

    def __str__(self):
        return f"[line {self.token.line}] Error: {self.message}"
