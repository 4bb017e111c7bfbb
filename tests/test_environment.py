import pytest

from pylox.environment import Environment
from pylox.errors import LoxRuntimeError
from pylox.tokens import Token, TokenType


def name(text, line=1):
    return Token(TokenType.IDENTIFIER, text, None, line)


def test_lookup_walks_enclosing_scopes():
    globals = Environment()
    globals.define("a", 1.0)
    inner = Environment(Environment(globals))
    assert inner.get(name("a")) == 1.0
    assert inner.owner("a") is globals
    assert inner.owner("b") is None


def test_assign_updates_the_binding_scope():
    outer = Environment()
    outer.define("a", 1.0)
    inner = Environment(outer)
    inner.assign(name("a"), 2.0)
    assert outer.values == {"a": 2.0}
    assert inner.values == {}


def test_shared_environment_sees_writes_from_every_holder():
    shared = Environment()
    shared.define("count", 0.0)
    first = Environment(shared)
    second = Environment(shared)
    first.assign_at(1, "count", 5.0)
    assert second.get_at(1, "count") == 5.0


def test_ancestor_and_depth():
    globals = Environment()
    child = Environment(globals)
    grandchild = Environment(child)
    assert grandchild.ancestor(2) is globals
    assert grandchild.depth() == 2
    assert repr(grandchild) == "<Environment depth=2 names=[]>"


@pytest.mark.parametrize("operation", ["get", "assign"])
def test_undefined_variable(operation):
    environment = Environment(Environment())
    with pytest.raises(LoxRuntimeError) as info:
        if operation == "get":
            environment.get(name("ghost", line=3))
        else:
            environment.assign(name("ghost", line=3), 1.0)
    assert str(info.value) == "[line 3] Error: Undefined variable 'ghost'."
