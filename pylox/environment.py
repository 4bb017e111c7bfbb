from .errors import LoxRuntimeError


class Environment:
    """One scope's variable bindings plus a link to the enclosing scope.

    Closures hold a plain reference to the environment they were defined
    in, so any number of functions may share one environment and see each
    other's writes.
    """

    __slots__ = ("values", "enclosing")

    def __init__(self, enclosing=None):
        self.values = {}
        self.enclosing = enclosing

    def define(self, name, value):
        self.values[name] = value

    def owner(self, name):
        """Innermost environment in the chain that binds ``name``, if any."""
        environment = self
        while environment is not None:
            if name in environment.values:
                return environment
            environment = environment.enclosing
        return None

    def get(self, token):
        if (environment := self.owner(token.lexeme)) is None:
            raise undefined(token)
        return environment.values[token.lexeme]

    def assign(self, token, value):
        if (environment := self.owner(token.lexeme)) is None:
            raise undefined(token)
        environment.values[token.lexeme] = value

    def get_at(self, distance, name):
        return self.ancestor(distance).values[name]

    def assign_at(self, distance, name, value):
        self.ancestor(distance).values[name] = value
        return value

    def ancestor(self, distance):
        environment = self
        for _ in range(distance):
            environment = environment.enclosing
        return environment

    def depth(self):
        """Number of links between this environment and the global one."""
        count = 0
        environment = self.enclosing
        while environment is not None:
            count += 1
            environment = environment.enclosing
        return count

    def __repr__(self):
        return f"<Environment depth={self.depth()} names={sorted(self.values)}>"


def undefined(token):
    return LoxRuntimeError(token, f"Undefined variable '{token.lexeme}'.")
