"""Reads back ("reifies") evaluator Values as LambdaTerms, normalization-by-evaluation style.

A Closure is opaque, so the only way to see what it does is to call it: it is probed with a FreeVariable standing
for its parameter and the result is reified in turn, then wrapped in an Abstraction binding the probe. A closure
returning a closure thus becomes a chain of abstractions, and each probe consumes exactly one of them.

By default the probe is always named PROBE, so nested abstractions all bind the same name and inner binders shadow
outer ones: (λa.λb.a) reifies to λx.λx.x. With fresh=True, every depth gets its own placeholder and the binders are
renamed afterwards to names that clash neither with each other nor with free variables of the result.
"""

from itertools import count
from string import ascii_lowercase

from lambda_nbe.lang.error import GenericException
from lambda_nbe.pure.evaluator import Closure, FreeVariable
from lambda_nbe.pure.term import Abstraction, Application, Variable

PROBE = "x"
PLACEHOLDER = "#{}"  # "#" can't be lexed, so placeholders never collide with source identifiers
NAMES = "xyzw" + "".join(reversed(ascii_lowercase[:-4]))  # x, y, z, w, v, u, ..., a


def reify(value, fresh=False):
    """Converts value back to a LambdaTerm."""
    if not fresh:
        return _reify(value)

    term = _reify(value, 0)
    avoid = {var for var in term.free_vars() if not var.startswith("#")}
    return _rename(term, _names(avoid))


def _reify(value, depth=None):
    """Reifies value, probing with PROBE if depth is None and with numbered placeholders otherwise."""
    if isinstance(value, FreeVariable):
        return Variable(value.name)

    elif isinstance(value, Closure):
        probe = PROBE if depth is None else PLACEHOLDER.format(depth)
        body = value(FreeVariable(probe))
        return Abstraction(probe, _reify(body, None if depth is None else depth + 1))

    raise GenericException("cannot reify '{}'", repr(value), internal=True)


def _names(avoid):
    """Yields alphabetic binder names that aren't in avoid: x, y, z, ..., a, xx, yy, ..."""
    for repeat in count(1):
        for char in NAMES:
            name = char * repeat
            if name not in avoid:
                yield name


def _rename(term, names):
    """Renames every placeholder binder in term, outermost first. Substitution can't capture here because every
    binder below a placeholder binder is itself a (different) placeholder.
    """
    if isinstance(term, Abstraction):
        if term.param.startswith("#"):
            name = next(names)
            return Abstraction(name, _rename(term.body.sub(term.param, Variable(name)), names))
        return Abstraction(term.param, _rename(term.body, names))
    elif isinstance(term, Application):
        return Application(_rename(term.func, names), _rename(term.arg, names))
    return term


def shadowed_binders(term, bound=frozenset()):
    """Returns the names bound by an abstraction inside another abstraction binding the same name."""
    if isinstance(term, Abstraction):
        shadowed = {term.param} if term.param in bound else set()
        return shadowed | shadowed_binders(term.body, bound | {term.param})
    elif isinstance(term, Application):
        return shadowed_binders(term.func, bound) | shadowed_binders(term.arg, bound)
    return set()
