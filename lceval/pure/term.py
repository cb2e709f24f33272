"""Pure lambda calculus terms: the expression trees consumed by the evaluator.

Formally, the terms accepted by lceval can be defined as

```
<λ-term> ::= <name>                   ; "variable"
           | "λ" <name> "." <λ-term>  ; "abstraction": exactly one parameter, exactly one body
           | <λ-term> <λ-term>        ; "application": associating by left: abcd = (((a b) c) d)
```

Terms are built by an external parser (or decoded from their tree encoding, see lang/statement.py) and are immutable
once constructed: nothing in lceval ever rewrites a term in place. Applications and abstractions are the only
non-terminals.

Source: https://plato.stanford.edu/entries/lambda-calculus/#Com
"""

from abc import ABC, abstractmethod


def _expr(node):
    """λ-notation of node, or its repr if node isn't a LambdaTerm (used when rendering malformed trees)."""
    return node.expr if isinstance(node, LambdaTerm) else repr(node)


def _display(node, indents):
    if isinstance(node, LambdaTerm):
        return node.display(indents)
    return f"{'    ' * indents}{node!r}"


class LambdaTerm(ABC):
    """Represents a λ-term: variable, abstraction, or application. Non-terminals store their two children in
    self.nodes, which is always a tuple.
    """

    def __init__(self, *nodes):
        self._nodes = tuple(nodes)

    @property
    def nodes(self):
        return self._nodes

    @property
    @abstractmethod
    def tokenizable(self):
        """Whether or not this term has child terms (and so needs parentheses when nested)."""

    @property
    @abstractmethod
    def expr(self):
        """λ-notation of this term."""

    def display(self, indents=0):
        """Recursively displays the term tree with readable format.

        Format:
        <LambdaTerm>(expr='<expr>', nodes=[
            <LambdaTerm>(expr='<expr>', nodes=[
                ...
                <LambdaTerm>(expr='<expr>')  # <-- if nodes is empty
            ])
        ])
        """
        result = f"{'    ' * indents}{type(self).__name__}(expr='{self.expr}'"
        if self.nodes:
            result += ", nodes=["
            for node in self.nodes:
                result += "\n" + _display(node, indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"

    def __repr__(self):
        return f"{type(self).__name__}('{self.expr}')"

    def __str__(self):
        return self.expr

    def __eq__(self, other):
        return type(other) is type(self) and other.nodes == self.nodes

    def __hash__(self):
        return hash((type(self).__name__, self.nodes))


class Variable(LambdaTerm):
    """Variable in lambda calculus: character(s) naming a bound value."""

    def __init__(self, name):
        super().__init__()
        self._name = name

    @property
    def name(self):
        return self._name

    @property
    def tokenizable(self):
        return False

    @property
    def expr(self):
        return self._name if isinstance(self._name, str) else repr(self._name)

    def __eq__(self, other):
        return type(other) is type(self) and other.name == self.name

    def __hash__(self):
        return hash((type(self).__name__, self._name))


class Abstraction(LambdaTerm):
    """Abstraction: the only way to make a function in lambda calculus. Nodes are [parameter Variable, body]."""

    def __init__(self, parameter, body):
        if isinstance(parameter, str):
            parameter = Variable(parameter)
        super().__init__(parameter, body)

    @classmethod
    def curry(cls, *args):
        """Abstraction.curry("f", "x", body) == λf.λx.body. Parameters (and a bare body) may be strs."""
        *parameters, body = args
        if not parameters:
            raise ValueError("curry expects at least one parameter")
        if isinstance(body, str):
            body = Variable(body)
        for parameter in reversed(parameters):
            body = cls(parameter, body)
        return body

    @property
    def parameter(self):
        """Name of the bound parameter."""
        return self._nodes[0].name if isinstance(self._nodes[0], Variable) else self._nodes[0]

    @property
    def body(self):
        return self._nodes[1]

    @property
    def tokenizable(self):
        return True

    @property
    def expr(self):
        arg, body = self.nodes

        expr = f"λ{_expr(arg)}."
        if isinstance(body, Application):
            return expr + f"({body.expr})"
        return expr + _expr(body)


class Application(LambdaTerm):
    """Application of an operator term to an operand term."""

    def __init__(self, operator, operand):
        super().__init__(operator, operand)

    @classmethod
    def chain(cls, *terms):
        """Application.chain(a, b, c) == ((a b) c). strs are converted to Variables."""
        if len(terms) < 2:
            raise ValueError("an application needs at least two terms")

        first, *others = (Variable(term) if isinstance(term, str) else term for term in terms)
        for term in others:
            first = cls(first, term)
        return first

    @property
    def operator(self):
        return self._nodes[0]

    @property
    def operand(self):
        return self._nodes[1]

    @property
    def tokenizable(self):
        return True

    @property
    def expr(self):
        expr = ""
        for node in self.nodes:
            if isinstance(node, LambdaTerm) and not node.tokenizable:
                expr += f"{node.expr} "
            else:
                expr += f"({_expr(node)}) "
        return expr.rstrip()


def free_variables(term):
    """Returns frozenset of the names that occur free in term, i.e. the names an environment must provide for term to
    evaluate without Unbound markers.
    """
    if isinstance(term, Variable):
        return frozenset([term.name])
    elif isinstance(term, Abstraction):
        return free_variables(term.body) - {term.parameter}
    elif isinstance(term, Application):
        return free_variables(term.operator) | free_variables(term.operand)
    return frozenset()
