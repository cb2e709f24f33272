"""Standard prelude: the environment that programs are evaluated in unless the session is bare.

The prelude holds two kinds of bindings:
    1. Host primitives: Python functions wrapped in Primitive, which curries them so that they can be applied one
       argument at a time like any closure. They work on host ints, not numerals (use toint to convert).
    2. Combinators: ordinary λ-terms, evaluated in order so that later ones may refer to earlier ones.
"""

from lceval.lang.error import GenericException
from lceval.lang.numerical import number
from lceval.pure.environment import Environment
from lceval.pure.evaluator import evaluate
from lceval.pure.term import Abstraction as Lam, Application, Variable

PRELUDE = "prelude"  # name used to import the prelude from a program file


class Primitive:
    """Curried host function. Applying a Primitive of arity n collects arguments until n are present, then calls
    func with all of them.
    """

    def __init__(self, name, func, arity=1, args=()):
        self.name = name
        self.func = func
        self.arity = arity
        self.args = tuple(args)

    def __call__(self, arg):
        args = self.args + (arg,)
        if len(args) < self.arity:
            return Primitive(self.name, self.func, self.arity, args)
        return self.func(*args)

    def __repr__(self):
        return f"Primitive('{self}')"

    def __str__(self):
        return " ".join([self.name] + [str(arg) for arg in self.args])


def _int(name, value):
    if type(value) is not int:
        raise GenericException("'{}' expects an int, got '{}'", (name, str(value)))
    return value


def _toint(value):
    num = number(value)
    if num is None:
        raise GenericException("'{}' is not a Church numeral", str(value))
    return num


# name: λ-term, in dependency order
COMBINATORS = {
    "I": Lam.curry("x", "x"),
    "K": Lam.curry("x", "y", "x"),
    "S": Lam.curry("x", "y", "z", Application.chain("x", "z", Application.chain("y", "z"))),
    "TRUE": Lam.curry("x", "y", "x"),
    "FALSE": Lam.curry("x", "y", "y"),
    "AND": Lam.curry("p", "q", Application.chain("p", "q", "p")),
    "OR": Lam.curry("p", "q", Application.chain("p", "p", "q")),
    "NOT": Lam.curry("p", Application.chain("p", "FALSE", "TRUE")),
    "IF": Lam.curry("p", "a", "b", Application.chain("p", "a", "b")),
    "SUCC": Lam.curry("n", "f", "x", Application.chain("f", Application.chain("n", "f", "x"))),
    "PLUS": Lam.curry("m", "n", "f", "x", Application.chain("m", "f", Application.chain("n", "f", "x"))),
    "MULT": Lam.curry("m", "n", "f", Application.chain("m", Application.chain("n", "f"))),
    "POW": Lam.curry("b", "e", Application.chain("e", "b")),
    "PRED": Lam.curry("n", "f", "x", Application.chain(
        "n",
        Lam.curry("g", "h", Application.chain("h", Application.chain("g", "f"))),
        Lam.curry("u", "x"),
        Lam.curry("u", "u"),
    )),
    "ISZERO": Lam.curry("n", Application.chain("n", Lam.curry("x", "FALSE"), Variable("TRUE"))),
}


def primitives(env):
    """Returns dict of name: Primitive. eq needs the already-evaluated TRUE/FALSE closures from env."""
    return {
        "add": Primitive("add", lambda a, b: _int("add", a) + _int("add", b), arity=2),
        "sub": Primitive("sub", lambda a, b: max(_int("sub", a) - _int("sub", b), 0), arity=2),
        "mul": Primitive("mul", lambda a, b: _int("mul", a) * _int("mul", b), arity=2),
        "succ": Primitive("succ", lambda a: _int("succ", a) + 1),
        "eq": Primitive("eq", lambda a, b: env["TRUE"] if a == b else env["FALSE"], arity=2),
        "toint": Primitive("toint", _toint),
    }


def standard_environment():
    """Returns a new Environment holding every combinator and host primitive."""
    env = Environment()
    for name, term in COMBINATORS.items():
        env = env.bind(name, evaluate(term, env))
    return env.update(primitives(env))
