"""Syntax tree nodes.

Nodes compare and hash by identity (``eq=False``): the resolver's binding
table is keyed by the node itself, so two structurally identical
references at different sites must stay distinct keys.
"""
from dataclasses import dataclass
from typing import Union

from .tokens import Token


class Expr:
    pass


class Stmt:
    pass


# Expr subclasses

@dataclass(eq=False)
class Assign(Expr):
    name: Token
    value: "AnyExpr"


@dataclass(eq=False)
class Binary(Expr):
    left: "AnyExpr"
    operator: Token
    right: "AnyExpr"


@dataclass(eq=False)
class Call(Expr):
    callee: "AnyExpr"
    paren: Token
    arguments: list["AnyExpr"]


@dataclass(eq=False)
class Get(Expr):
    object: "AnyExpr"
    name: Token


@dataclass(eq=False)
class Grouping(Expr):
    expression: "AnyExpr"


@dataclass(eq=False)
class Literal(Expr):
    value: object


@dataclass(eq=False)
class Logical(Expr):
    left: "AnyExpr"
    operator: Token
    right: "AnyExpr"


@dataclass(eq=False)
class Set(Expr):
    object: "AnyExpr"
    name: Token
    value: "AnyExpr"


@dataclass(eq=False)
class Super(Expr):
    keyword: Token
    method: Token


@dataclass(eq=False)
class This(Expr):
    keyword: Token


@dataclass(eq=False)
class Unary(Expr):
    operator: Token
    right: "AnyExpr"


@dataclass(eq=False)
class Variable(Expr):
    name: Token


# Stmt subclasses

@dataclass(eq=False)
class Block(Stmt):
    statements: list["AnyStmt | None"]


@dataclass(eq=False)
class Function(Stmt):
    name: Token
    params: list[Token]
    body: list["AnyStmt | None"]


@dataclass(eq=False)
class Class(Stmt):
    name: Token
    superclass: Variable | None
    methods: list[Function]


@dataclass(eq=False)
class Expression(Stmt):
    expression: "AnyExpr"


@dataclass(eq=False)
class If(Stmt):
    condition: "AnyExpr"
    then_branch: "AnyStmt"
    else_branch: "AnyStmt | None"


@dataclass(eq=False)
class Print(Stmt):
    expression: "AnyExpr"


@dataclass(eq=False)
class Return(Stmt):
    keyword: Token
    value: "AnyExpr | None"


@dataclass(eq=False)
class Var(Stmt):
    name: Token
    initializer: "AnyExpr | None"


@dataclass(eq=False)
class While(Stmt):
    condition: "AnyExpr"
    body: "AnyStmt"


# Closed variant sets. Every ``match`` over a node ends in
# ``assert_never`` so a type checker flags a site that misses a variant.
AnyExpr = Union[
    Assign, Binary, Call, Get, Grouping, Literal, Logical,
    Set, Super, This, Unary, Variable,
]

AnyStmt = Union[
    Block, Class, Expression, Function, If, Print, Return, Var, While,
]
