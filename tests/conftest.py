import io

import pytest

from pylox import Lox


class Session:
    """A Lox instance with captured output, kept across ``run()`` calls."""

    def __init__(self):
        self.out = io.StringIO()
        self.err = io.StringIO()
        self.lox = Lox(self.out, self.err)

    def run(self, source):
        return self.lox.run(source)

    @property
    def output(self):
        return self.out.getvalue().splitlines()

    @property
    def errors(self):
        return self.err.getvalue().splitlines()


@pytest.fixture
def session():
    return Session()


@pytest.fixture
def run(session):
    """Run a program and return its printed lines."""

    def run(source):
        session.run(source)
        return session.output

    return run
