"""Environment-based λ-calculus evaluator.

For reference:
- "Pure lambda calculus": variables, single-parameter abstractions and applications (lceval/pure)
- "lceval language": pure lambda calculus + named functions, imports and a prelude (lceval/lang)

Basic program flow:
    1. Decoding: an already-parsed λ-term tree (JSON encoding) is decoded into LambdaTerms (lang/statement.py)
    2. Evaluation: terms are evaluated against an immutable Environment, producing closures, host values or Unbound
       markers (pure/evaluator.py)
    3. Output: closures that behave like Church numerals are read back as numbers (lang/numerical.py)
"""

from lceval.lang.error import GenericException, InapplicableValue, MalformedExpression
from lceval.pure.environment import Environment
from lceval.pure.evaluator import Closure, Unbound, apply, evaluate
from lceval.pure.term import Abstraction, Application, LambdaTerm, Variable, free_variables
