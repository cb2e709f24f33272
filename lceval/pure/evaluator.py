"""Environment-based evaluation of λ-terms.

Unlike normal-order beta reduction, which rewrites a term until no redex is left, evaluate never substitutes into a
term. It walks the tree once, carrying an Environment that says what each free name stands for:

    - a Variable evaluates to whatever the environment binds it to (or to an Unbound marker)
    - an Abstraction evaluates to a Closure that remembers the environment it was created in
    - an Application evaluates its operator, then its operand, and then applies the first to the second

Applying a Closure evaluates its body in the Closure's own environment extended with one binding for its parameter,
which is what gives lexical scoping. Bodies of abstractions are never evaluated before the abstraction is applied.

evaluate is pure: it does no I/O and keeps no state between calls. Host values in the environment (numbers, Python
callables such as prelude.Primitive) are returned untouched and, if callable, can be applied like closures.
"""

from lceval.lang.error import InapplicableValue, MalformedExpression
from lceval.pure.environment import Environment
from lceval.pure.term import Abstraction, Application, LambdaTerm, Variable


class Unbound:
    """Result of looking up a name that isn't in the environment. Not an error, so that partially specified programs
    can still be evaluated and inspected.
    """

    def __init__(self, name):
        self.name = name

    def __eq__(self, other):
        return isinstance(other, Unbound) and other.name == self.name

    def __hash__(self):
        return hash((Unbound, self.name))

    def __repr__(self):
        return f"Unbound('{self.name}')"

    def __str__(self):
        return self.name


class Closure:
    """Function value: an abstraction's parameter and body together with the environment it was evaluated in."""

    def __init__(self, parameter, body, env):
        self._parameter = parameter
        self._body = body
        self._env = env

    @property
    def parameter(self):
        return self._parameter

    @property
    def body(self):
        return self._body

    @property
    def env(self):
        return self._env

    @property
    def term(self):
        """The Abstraction this closure was made from."""
        return Abstraction(self._parameter, self._body)

    def __call__(self, arg):
        """Lets host code (e.g. a Primitive) apply closures like any other Python callable."""
        return apply(self, arg)

    def __eq__(self, other):
        return (isinstance(other, Closure) and other.parameter == self.parameter and other.body == self.body
                and other.env == self.env)

    def __repr__(self):
        return f"Closure('{self.term.expr}')"

    def __str__(self):
        return self.term.expr


def _check_shape(term):
    """Raises MalformedExpression if term isn't one of the three λ-term shapes."""
    if isinstance(term, Variable):
        if not isinstance(term.name, str):
            raise MalformedExpression(term, "has a variable name that is not a string")
    elif isinstance(term, Abstraction):
        if not isinstance(term.nodes[0], Variable) or not isinstance(term.parameter, str):
            raise MalformedExpression(term, "has a parameter that is not a variable")
        if not isinstance(term.body, LambdaTerm):
            raise MalformedExpression(term, "has a body that is not a λ-term")
    elif isinstance(term, Application):
        if not all(isinstance(node, LambdaTerm) for node in term.nodes):
            raise MalformedExpression(term, "applies something that is not a λ-term")
    else:
        raise MalformedExpression(term)


def apply(func, arg):
    """Applies an evaluated operator to an evaluated operand. Closures are applied by evaluating their body in their
    captured environment with the parameter bound to arg; callable host values are called with arg. Anything else
    (including Unbound markers) raises InapplicableValue.
    """
    if isinstance(func, Closure):
        return evaluate(func.body, func.env.bind(func.parameter, arg))
    elif isinstance(func, Unbound) or not callable(func):
        raise InapplicableValue(func, arg)
    return func(arg)


def evaluate(term, env=None):
    """Evaluates term in env and returns its value: a Closure, an Unbound marker, or a host value from env. env may be
    an Environment, any other mapping of name: value, or None (empty environment).

    Raises MalformedExpression if term (or any evaluated subterm) isn't a valid λ-term, and InapplicableValue if an
    application's operator evaluates to something that can't be applied.
    """
    if env is None:
        env = Environment()
    elif not isinstance(env, Environment):
        env = Environment(env)

    _check_shape(term)

    if isinstance(term, Variable):
        if term.name in env:
            return env[term.name]
        return Unbound(term.name)

    elif isinstance(term, Abstraction):
        return Closure(term.parameter, term.body, env)

    func = evaluate(term.operator, env)  # operator is always evaluated before operand
    arg = evaluate(term.operand, env)
    return apply(func, arg)
