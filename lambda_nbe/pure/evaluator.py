"""Call-by-value, environment-passing evaluator.

λ-abstractions are evaluated to Python closures (higher-order abstract syntax) instead of being kept as syntax and
beta-reduced by substitution. A Value is therefore either

- a FreeVariable: an identifier that evaluation could not interpret as a function, or
- a Closure: an opaque unary Python function plus a copy of the environment it was created in.

Use reifier.reify to get a displayable LambdaTerm back from a Closure.
"""

from dataclasses import dataclass

from lambda_nbe.lang.error import GenericException
from lambda_nbe.pure.term import Abstraction, Application, Variable


@dataclass(frozen=True)
class FreeVariable:
    name: str

    def __repr__(self):
        return f"Var({self.name!r})"


class Closure:
    """Runtime function value. Closures are only ever equal to themselves, even if they behave identically."""

    def __init__(self, func, env=None):
        self.func = func
        self.env = dict(env) if env else {}  # snapshot: later changes to the defining env never leak in

    def __call__(self, arg):
        return self.func(arg)

    def __repr__(self):
        return "Closure(<function>)"


class EvalError(GenericException):
    """Superclass of all evaluation errors."""


class ApplyNonFunction(EvalError):
    """Raised when the function position of an application does not evaluate to a Closure. Fatal for the evaluation
    in progress: there is no recovery.
    """

    def __init__(self, value, term):
        self.value = value
        self.term = term
        super().__init__("cannot apply non-function '{}' in '{}'", (value.name, str(term)), diagnosis=False)


def evaluate(term, env=None):
    """Evaluates term in env (name: Value dict, never mutated) and returns a FreeVariable or Closure."""
    if env is None:
        env = {}

    if isinstance(term, Variable):
        return env.get(term.name, FreeVariable(term.name))

    elif isinstance(term, Abstraction):
        captured = dict(env)

        def apply(arg):
            return evaluate(term.body, {**captured, term.param: arg})

        return Closure(apply, captured)

    elif isinstance(term, Application):
        func = evaluate(term.func, env)
        arg = evaluate(term.arg, env)
        if not isinstance(func, Closure):
            raise ApplyNonFunction(func, term)
        return func(arg)

    raise GenericException("cannot evaluate '{}'", repr(term), internal=True)
