import math
import time
from typing import assert_never

from .environment import Environment
from .errors import LoxRuntimeError
from .runtime import (
    LoxCallable, LoxClass, LoxFunction, LoxInstance, NativeFunction,
    Returned, stringify,
)
from .syntax import (
    Assign, Binary, Block, Call, Class, Expression, Function, Get, Grouping,
    If, Literal, Logical, Print, Return, Set, Super, This, Unary, Var,
    Variable, While,
)
from .tokens import TokenType


class Interpreter:
    """Tree-walking evaluator.

    Globals and the binding table outlive a single call to
    ``interpret()``, so an interactive session can build on earlier
    submissions.
    """

    def __init__(self, out=None):
        self.out = out
        self.globals = Environment()
        self.environment = self.globals
        self.locals = {}

        self.define_native("clock", 0, time.time)

    def define_native(self, name, arity, function):
        self.globals.define(name, NativeFunction(name, arity, function))

    def resolve(self, bindings):
        self.locals.update(bindings)

    def interpret(self, statements):
        """Execute ``statements``, raising ``LoxRuntimeError`` on failure."""
        try:
            for statement in statements:
                if statement is not None:
                    self.execute(statement)
        finally:
            self.environment = self.globals

    def execute_block(self, statements, environment):
        previous = self.environment
        try:
            self.environment = environment
            for statement in statements:
                if statement is None:
                    continue
                if (result := self.execute(statement)) is not None:
                    return result
            return None
        finally:
            self.environment = previous

    def execute(self, stmt):
        match stmt:
            case Block(statements):
                return self.execute_block(statements, Environment(self.environment))
            case Class():
                self.execute_class(stmt)
            case Expression(expression):
                self.evaluate(expression)
            case Function(name):
                function = LoxFunction(stmt, self.environment, False)
                self.environment.define(name.lexeme, function)
            case If(condition, then_branch, else_branch):
                if self.is_truthy(self.evaluate(condition)):
                    return self.execute(then_branch)
                if else_branch is not None:
                    return self.execute(else_branch)
            case Print(expression):
                value = self.evaluate(expression)
                print(stringify(value), file=self.out)
            case Return(_, value):
                if value is None:
                    return Returned(None)
                return Returned(self.evaluate(value))
            case Var(name, initializer):
                value = None
                if initializer is not None:
                    value = self.evaluate(initializer)
                self.environment.define(name.lexeme, value)
            case While(condition, body):
                while self.is_truthy(self.evaluate(condition)):
                    if (result := self.execute(body)) is not None:
                        return result
            case _:
                assert_never(stmt)
        return None

    def execute_class(self, stmt):
        superclass = None
        if stmt.superclass is not None:
            superclass = self.evaluate(stmt.superclass)
            if not isinstance(superclass, LoxClass):
                raise LoxRuntimeError(
                    stmt.superclass.name, "Superclass must be a class.")

        self.environment.define(stmt.name.lexeme, None)

        environment = self.environment
        if superclass is not None:
            environment = Environment(environment)
            environment.define("super", superclass)

        methods = {
            method.name.lexeme: LoxFunction(
                method, environment, method.name.lexeme == "init")
            for method in stmt.methods}

        klass = LoxClass(stmt.name.lexeme, superclass, methods)
        self.environment.assign(stmt.name, klass)

    def evaluate(self, expr):
        match expr:
            case Assign(name, value_expr):
                value = self.evaluate(value_expr)
                if (distance := self.locals.get(expr)) is not None:
                    self.environment.assign_at(distance, name.lexeme, value)
                else:
                    self.globals.assign(name, value)
                return value
            case Binary(left, operator, right):
                return self.binary(operator, self.evaluate(left), self.evaluate(right))
            case Call(callee_expr, paren, argument_exprs):
                callee = self.evaluate(callee_expr)
                arguments = [self.evaluate(argument) for argument in argument_exprs]
                if not isinstance(callee, LoxCallable):
                    raise LoxRuntimeError(
                        paren, "Can only call functions and classes.")
                if len(arguments) != callee.arity():
                    raise LoxRuntimeError(
                        paren, f"Expected {callee.arity()} arguments but got {len(arguments)}.")
                try:
                    return callee.call(self, arguments)
                except RecursionError:
                    # Re-raised by each enclosing call until one has room to build the error.
                    raise LoxRuntimeError(paren, "Stack overflow.") from None
            case Get(obj_expr, name):
                obj = self.evaluate(obj_expr)
                if isinstance(obj, LoxInstance):
                    return obj.get(name)
                raise LoxRuntimeError(name, "Only instances have properties.")
            case Grouping(expression):
                return self.evaluate(expression)
            case Literal(value):
                return value
            case Logical(left_expr, operator, right_expr):
                left = self.evaluate(left_expr)
                if operator.type == TokenType.OR:
                    if self.is_truthy(left):
                        return left
                elif not self.is_truthy(left):
                    return left
                return self.evaluate(right_expr)
            case Set(obj_expr, name, value_expr):
                obj = self.evaluate(obj_expr)
                if not isinstance(obj, LoxInstance):
                    raise LoxRuntimeError(name, "Only instances have fields.")
                value = self.evaluate(value_expr)
                obj.set(name, value)
                return value
            case Super(_, method_name):
                distance = self.locals[expr]
                superclass = self.environment.get_at(distance, "super")
                # "this" is always bound one scope inside "super".
                instance = self.environment.get_at(distance - 1, "this")
                method = superclass.find_method(method_name.lexeme)
                if method is None:
                    raise LoxRuntimeError(
                        method_name, f"Undefined property '{method_name.lexeme}'.")
                return method.bind(instance)
            case This(keyword):
                return self.lookup_variable(keyword, expr)
            case Unary(operator, right_expr):
                right = self.evaluate(right_expr)
                match operator.type:
                    case TokenType.BANG:
                        return not self.is_truthy(right)
                    case TokenType.MINUS:
                        self.check_operands(operator, right)
                        return -right
                return None
            case Variable(name):
                return self.lookup_variable(name, expr)
            case _:
                assert_never(expr)

    def binary(self, operator, left, right):
        match operator.type:
            case TokenType.BANG_EQUAL: return not self.is_equal(left, right)
            case TokenType.EQUAL_EQUAL: return self.is_equal(left, right)
            case TokenType.GREATER:
                self.check_operands(operator, left, right)
                return left > right
            case TokenType.GREATER_EQUAL:
                self.check_operands(operator, left, right)
                return left >= right
            case TokenType.LESS:
                self.check_operands(operator, left, right)
                return left < right
            case TokenType.LESS_EQUAL:
                self.check_operands(operator, left, right)
                return left <= right
            case TokenType.MINUS:
                self.check_operands(operator, left, right)
                return left - right
            case TokenType.PLUS:
                if isinstance(left, float) and isinstance(right, float):
                    return left + right
                if isinstance(left, str) and isinstance(right, str):
                    return left + right
                raise LoxRuntimeError(
                    operator, "Operands must be two numbers or two strings.")
            case TokenType.SLASH:
                self.check_operands(operator, left, right)
                return self.divide(left, right)
            case TokenType.STAR:
                self.check_operands(operator, left, right)
                return left * right
        return None

    def divide(self, left, right):
        # IEEE-754 division; Python raises where it would give inf or nan.
        if right != 0.0:
            return left / right
        if left == 0.0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)

    def lookup_variable(self, name, expr):
        if (distance := self.locals.get(expr)) is not None:
            return self.environment.get_at(distance, name.lexeme)
        return self.globals.get(name)

    def is_truthy(self, value):
        if value is None:
            return False
        if isinstance(value, bool):
            return value
        return True

    def is_equal(self, left, right):
        # bool is an int subclass in Python, so true == 1 needs the type check.
        if type(left) is not type(right):
            return False
        if isinstance(left, float) and math.isnan(left) and math.isnan(right):
            # Boxed double equality: NaN equals itself.
            return True
        return left == right

    def check_operands(self, operator, *operands):
        if any(not isinstance(operand, float) for operand in operands):
            if len(operands) == 1:
                raise LoxRuntimeError(operator, "Operand must be a number.")
            raise LoxRuntimeError(operator, "Operands must be numbers.")
