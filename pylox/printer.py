from decimal import Decimal
from typing import assert_never

from .syntax import (
    Assign, Binary, Call, Get, Grouping, Literal, Logical, Set, Super, This,
    Unary, Variable,
)


class AstPrinter:
    """Renders an expression as fully parenthesized Lox source.

    Groupings print as their inner expression, since every operator node
    already carries its own parentheses; printing the result of parsing a
    printed expression gives back the same text.
    """

    def print(self, expr):
        match expr:
            case Assign(name, value):
                return f"{name.lexeme} = {self.print(value)}"
            case Binary(left, operator, right) | Logical(left, operator, right):
                return self.parenthesize(
                    f"{self.print(left)} {operator.lexeme} {self.print(right)}")
            case Call(callee, _, arguments):
                args = ", ".join(self.print(argument) for argument in arguments)
                return f"{self.print(callee)}({args})"
            case Get(obj, name):
                return f"{self.print(obj)}.{name.lexeme}"
            case Grouping(expression):
                return self.print(expression)
            case Literal(value):
                if isinstance(value, str):
                    return f"\"{value}\""
                if isinstance(value, bool):
                    return "true" if value else "false"
                if value is None:
                    return "nil"
                return self.number(value)
            case Set(obj, name, value):
                return f"{self.print(obj)}.{name.lexeme} = {self.print(value)}"
            case Super(_, method):
                return f"super.{method.lexeme}"
            case This():
                return "this"
            case Unary(operator, right):
                return self.parenthesize(f"{operator.lexeme}{self.print(right)}")
            case Variable(name):
                return name.lexeme
            case _:
                assert_never(expr)

    def number(self, value):
        # Lox has no exponent syntax, so always write the digits out.
        text = format(Decimal(repr(value)), "f")
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return text

    def parenthesize(self, text):
        return f"({text})"
