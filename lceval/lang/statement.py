"""Statements of the lceval language and the tree decoder that turns already-parsed λ-terms (in their JSON tree
encoding) into LambdaTerms. Note that this module does not provide input file reading (see session.py), but rather
decoding of single statements.

Term encoding:

```
<term>      ::= <name>                                ; JSON string: Variable
              | <natural>                             ; JSON integer: Church numeral
              | {"λ": <name>, "body": <term>}         ; Abstraction ("lambda" is accepted in place of "λ")
              | [<term>, <term>, <term>*]             ; Application, associating by left: [a, b, c] = ((a b) c)
```

Statement encoding:

```
<import_stmt> ::= {"import": <path>}                  ; path relative to the importing file ("prelude" is reserved)
<named_func>  ::= {"name": <name>, "term": <term>}    ; evaluated and bound immediately
<exec_stmt>   ::= {"term": <term>} | <term>           ; will be outputted when the session is run
```
"""

import json
from abc import ABC, abstractmethod

from lceval.lang.error import GenericException, MalformedExpression
from lceval.lang.numerical import cnumber
from lceval.pure.evaluator import evaluate
from lceval.pure.term import Abstraction, Application, LambdaTerm, Variable, free_variables

LAMBDA_KEYS = ("λ", "lambda")


def decode(tree):
    """Converts the JSON tree encoding of a λ-term to a LambdaTerm. Raises MalformedExpression if tree is not a valid
    encoding. LambdaTerms are returned unchanged.
    """
    if isinstance(tree, LambdaTerm):
        return tree

    elif isinstance(tree, str):
        if not tree or any(char.isspace() for char in tree):
            raise MalformedExpression(tree, "is not a valid variable name")
        return Variable(tree)

    elif isinstance(tree, int) and not isinstance(tree, bool):
        if tree < 0:
            raise MalformedExpression(tree, "is not a natural number")
        return cnumber(tree)

    elif isinstance(tree, dict):
        keys = [key for key in LAMBDA_KEYS if key in tree]
        if len(keys) != 1 or set(tree) != {keys[0], "body"}:
            raise MalformedExpression(tree, "is not a valid abstraction (expected keys 'λ' and 'body')")

        parameter = decode(tree[keys[0]])
        if not isinstance(parameter, Variable):
            raise MalformedExpression(tree, "has a parameter that is not a variable")
        return Abstraction(parameter, decode(tree["body"]))

    elif isinstance(tree, list):
        if len(tree) < 2:
            raise MalformedExpression(tree, "is not a valid application (expected at least two terms)")
        return Application.chain(*(decode(node) for node in tree))

    raise MalformedExpression(tree)


class Statement(ABC):
    """Superclass representing any statement in the lceval language."""

    def __init__(self, obj, original_expr=None):
        """Assumes check has been run."""
        if original_expr is None:
            original_expr = json.dumps(obj, ensure_ascii=False)

        self.obj = obj
        self.original_expr = original_expr  # used for errors messages

    @staticmethod
    @abstractmethod
    def check(obj):
        """This method should check whether obj is of this statement's form, raising a GenericException if obj looks
        like this statement but is invalid.
        """

    @classmethod
    def infer(cls, obj, original_expr=None):
        """Infers the type of statement obj is and returns an object of the correct subclass."""
        for subclass in cls.__subclasses__():
            if subclass.check(obj):
                return subclass(obj, original_expr)

        raise GenericException("'{}' is not a valid lceval statement", original_expr or json.dumps(obj))

    @classmethod
    def loads(cls, line):
        """Decodes a single JSON line into a Statement."""
        try:
            obj = json.loads(line)
        except json.JSONDecodeError as exc:
            raise GenericException("'{}' is not valid JSON: " + exc.msg, line, start=exc.pos, end=exc.pos + 1)
        return cls.infer(obj, line)

    def __repr__(self):
        return f"{type(self).__name__}('{self.original_expr}')"

    def __str__(self):
        return self.original_expr


class ImportStmt(Statement):
    """Import statement. See docstrings for grammar."""

    def __init__(self, obj, original_expr=None):
        super().__init__(obj, original_expr)
        self.path = obj["import"]

    @staticmethod
    def check(obj):
        if not isinstance(obj, dict) or "import" not in obj:
            return False
        if set(obj) != {"import"} or not isinstance(obj["import"], str) or not obj["import"]:
            raise GenericException("import expects {\"import\": \"FILENAME\"}")
        return True


class NamedFunc(Statement):
    """NamedFuncs represent binding statements: the value of term is bound to name in the session namespace."""

    def __init__(self, obj, original_expr=None):
        super().__init__(obj, original_expr)
        self.name = obj["name"]
        self.term = decode(obj["term"])

        if self.name in free_variables(self.term):
            raise GenericException("recursive definitions not supported", self.original_expr)

    @staticmethod
    def check(obj):
        if not isinstance(obj, dict) or "name" not in obj:
            return False
        if set(obj) != {"name", "term"}:
            raise GenericException("named function expects {\"name\": NAME, \"term\": TERM}")
        if not isinstance(obj["name"], str) or not obj["name"] or obj["name"].isdigit():
            raise GenericException("'{}' is not a valid name", str(obj["name"]))
        return True

    def bind(self, env):
        """Returns env extended with this statement's name bound to its evaluated term."""
        return env.bind(self.name, evaluate(self.term, env))


class ExecStmt(Statement):
    """Executable statement: a term whose value will be outputted when the session is run."""

    def __init__(self, obj, original_expr=None):
        super().__init__(obj, original_expr)
        if isinstance(obj, dict) and set(obj) == {"term"}:
            obj = obj["term"]
        self.term = decode(obj)

    @staticmethod
    def check(obj):
        if isinstance(obj, dict) and set(obj) == {"term"}:
            return True
        return isinstance(obj, (str, int, list)) or (isinstance(obj, dict) and any(key in obj for key in LAMBDA_KEYS))

    def execute(self, env):
        """Running an ExecStmt is equivalent to evaluating its term in env."""
        return evaluate(self.term, env)
