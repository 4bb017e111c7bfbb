from enum import Enum, auto
from typing import assert_never

from .errors import Diagnostic
from .syntax import (
    Assign, Binary, Block, Call, Class, Expression, Function, Get, Grouping,
    If, Literal, Logical, Print, Return, Set, Super, This, Unary, Var,
    Variable, While,
)


class FunctionType(Enum):
    NONE = auto()
    FUNCTION = auto()
    INITIALIZER = auto()
    METHOD = auto()


class ClassType(Enum):
    NONE = auto()
    CLASS = auto()
    SUBCLASS = auto()


class Resolver:
    """Static pass computing how many scopes out each local reference lives.

    The result is a side table, ``locals``, mapping expression nodes to
    their distance. References not found in any local scope get no entry
    and are looked up among the globals at runtime.
    """

    def __init__(self):
        self.scopes = []
        self.locals = {}
        self.diagnostics = []
        self.current_function = FunctionType.NONE
        self.current_class = ClassType.NONE

    def resolve(self, statements):
        for statement in statements:
            if statement is not None:
                self.resolve_stmt(statement)
        return self.locals

    def resolve_stmt(self, stmt):
        match stmt:
            case Block(statements):
                self.begin_scope()
                self.resolve(statements)
                self.end_scope()
            case Class():
                self.resolve_class(stmt)
            case Expression(expression) | Print(expression):
                self.resolve_expr(expression)
            case Function(name):
                self.declare(name)
                self.define(name)
                self.resolve_function(stmt, FunctionType.FUNCTION)
            case If(condition, then_branch, else_branch):
                self.resolve_expr(condition)
                self.resolve_stmt(then_branch)
                if else_branch is not None:
                    self.resolve_stmt(else_branch)
            case Return(keyword, value):
                if self.current_function == FunctionType.NONE:
                    self.error(keyword, "Can't return from top-level code.")
                if value is not None:
                    if self.current_function == FunctionType.INITIALIZER:
                        self.error(keyword, "Can't return a value from an initializer.")
                    self.resolve_expr(value)
            case Var(name, initializer):
                self.declare(name)
                if initializer is not None:
                    self.resolve_expr(initializer)
                self.define(name)
            case While(condition, body):
                self.resolve_expr(condition)
                self.resolve_stmt(body)
            case _:
                assert_never(stmt)

    def resolve_class(self, stmt):
        enclosing_class = self.current_class
        self.current_class = ClassType.CLASS

        self.declare(stmt.name)
        self.define(stmt.name)

        if stmt.superclass is not None:
            if stmt.name.lexeme == stmt.superclass.name.lexeme:
                self.error(stmt.superclass.name, "A class can't inherit from itself.")
            self.current_class = ClassType.SUBCLASS
            self.resolve_expr(stmt.superclass)
            self.begin_scope()
            self.scopes[-1]["super"] = True

        self.begin_scope()
        self.scopes[-1]["this"] = True
        for method in stmt.methods:
            kind = FunctionType.METHOD
            if method.name.lexeme == "init":
                kind = FunctionType.INITIALIZER
            self.resolve_function(method, kind)
        self.end_scope()

        if stmt.superclass is not None:
            self.end_scope()

        self.current_class = enclosing_class

    def resolve_expr(self, expr):
        match expr:
            case Assign(name, value):
                self.resolve_expr(value)
                self.resolve_local(expr, name)
            case Binary(left, _, right) | Logical(left, _, right):
                self.resolve_expr(left)
                self.resolve_expr(right)
            case Call(callee, _, arguments):
                self.resolve_expr(callee)
                for argument in arguments:
                    self.resolve_expr(argument)
            case Get(obj):
                self.resolve_expr(obj)
            case Grouping(expression):
                self.resolve_expr(expression)
            case Literal():
                pass
            case Set(obj, _, value):
                self.resolve_expr(value)
                self.resolve_expr(obj)
            case Super(keyword):
                if self.current_class == ClassType.NONE:
                    self.error(keyword, "Can't use 'super' outside of a class.")
                elif self.current_class != ClassType.SUBCLASS:
                    self.error(keyword, "Can't use 'super' in a class with no superclass.")
                self.resolve_local(expr, keyword)
            case This(keyword):
                if self.current_class == ClassType.NONE:
                    self.error(keyword, "Can't use 'this' outside of a class.")
                    return
                self.resolve_local(expr, keyword)
            case Unary(_, right):
                self.resolve_expr(right)
            case Variable(name):
                if self.scopes and self.scopes[-1].get(name.lexeme) is False:
                    self.error(name, "Can't read local variable in its own initializer.")
                self.resolve_local(expr, name)
            case _:
                assert_never(expr)

    def resolve_function(self, function, kind):
        enclosing_function = self.current_function
        self.current_function = kind
        self.begin_scope()
        for param in function.params:
            self.declare(param)
            self.define(param)
        self.resolve(function.body)
        self.end_scope()
        self.current_function = enclosing_function

    def begin_scope(self):
        self.scopes.append({})

    def end_scope(self):
        self.scopes.pop()

    def declare(self, name):
        if not self.scopes:
            return
        scope = self.scopes[-1]
        if name.lexeme in scope:
            self.error(name, "Already a variable with this name in this scope.")
        scope[name.lexeme] = False

    def define(self, name):
        if self.scopes:
            self.scopes[-1][name.lexeme] = True

    def resolve_local(self, expr, name):
        for distance, scope in enumerate(reversed(self.scopes)):
            if name.lexeme in scope:
                self.locals[expr] = distance
                return

    def error(self, token, message):
        self.diagnostics.append(Diagnostic.at(token, message))


def resolve(statements):
    """Resolve ``statements``, returning ``(bindings, diagnostics)``."""
    resolver = Resolver()
    bindings = resolver.resolve(statements)
    return bindings, resolver.diagnostics
