"""Natural numbers encoded as Church numerals. Arithmetic on numerals is not implemented here (see lang/prelude.py):
this module only converts between Python ints and numerals.

Source: https://en.wikipedia.org/wiki/Church_encoding#Calculation_with_Church_numerals
"""

from lceval.lang.error import GenericException
from lceval.pure.environment import Environment
from lceval.pure.evaluator import Closure, evaluate
from lceval.pure.term import Abstraction, Application, Variable


class _NotANumeral(Exception):
    """Raised by the read-back successor when it is handed something other than an int."""


def _succ(num):
    if type(num) is not int:
        raise _NotANumeral()
    return num + 1


def cnumber(num):
    """Returns Abstraction λf.λx.f (f (... x)) for natural number num (cnum = Church numeral)."""
    if isinstance(num, (float, bool)):
        raise GenericException("expected natural number, got '{}'", str(num))
    try:
        num = int(num)
    except (TypeError, ValueError):
        raise GenericException("expected natural number, got '{}'", str(num))
    if num < 0:
        raise GenericException("expected natural number, got '{}'", str(num))

    body = Variable("x")
    for __ in range(num):
        body = Application(Variable("f"), body)

    return Abstraction.curry("f", "x", body)


def _structural_number(term):
    """Returns int if term is literally λf.λx.f (f (... x)), else None. Never evaluates anything."""
    if not isinstance(term, Abstraction) or not isinstance(term.body, Abstraction):
        return None

    first_arg, second_arg = term.parameter, term.body.parameter
    if first_arg == second_arg:
        return None

    num = 0
    nth_body = term.body.body
    while isinstance(nth_body, Application):
        if nth_body.operator != Variable(first_arg):
            return None
        nth_body = nth_body.operand
        num += 1

    return num if nth_body == Variable(second_arg) else None


def number(value):
    """Returns int given a value that behaves like a Church numeral, i.e. a closure that, applied to a successor
    function and then to 0, yields an int. Returns None otherwise.

    Closures whose abstraction is literally a numeral are counted without being run. Other closures are read back
    extensionally, so terms that are η-equivalent to a numeral read back as that numeral (λx.x is 1). Any error or
    runaway recursion while running them means the closure is not a numeral.
    """
    if not isinstance(value, Closure):
        return None

    num = _structural_number(value.term)
    if num is not None:
        return num

    env = Environment({"n": value, "succ": _succ, "zero": 0})
    try:
        result = evaluate(Application.chain("n", "succ", "zero"), env)
    except (_NotANumeral, GenericException, RecursionError):
        return None

    return result if type(result) is int else None
