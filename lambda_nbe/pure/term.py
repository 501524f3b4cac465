"""Pure lambda calculus abstract syntax tree.

```
<λ-term> ::= <identifier>                ; "variable"
           | "λ" <identifier> "." <λ-term> ; "abstraction"
           | <λ-term> <λ-term>          ; "application"
```

Terms are immutable and compared structurally: every transformation (sub) builds a new tree and leaves the old one
untouched, so sub-terms are never shared between a term and its substituted copy in a way that matters.

Note that sub is capture-UNSAFE: free variables of the substituted term are never renamed, so they can be captured
by a binder of the same name inside the target term. For example, substituting `y` for `x` in `λy.x` gives `λy.y`.
Callers that need a correct calculus must rename bound variables themselves.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


class LambdaTerm(ABC):
    """Represents a valid λ-term: variable, abstraction, or application."""

    @property
    @abstractmethod
    def nodes(self):
        """Child terms, in display order."""

    @property
    @abstractmethod
    def label(self):
        """Label of this node in ascii_tree."""

    @abstractmethod
    def pretty_print(self, symbol="\\"):
        """Renders this term in surface syntax, using symbol for λ. Only parenthesizes where leaving the parentheses
        out would change the parse.
        """

    @abstractmethod
    def sub(self, var, new_term):
        """Returns a copy of this term with all free occurrences of var replaced with new_term. Stops at abstractions
        that rebind var, but does NOT rename binders that would capture new_term's free variables.
        """

    @abstractmethod
    def free_vars(self):
        """Set of names that occur free in this term."""

    @abstractmethod
    def alpha_equals(self, other, mapping=None, other_mapping=None):
        """Whether or not two LambdaTerms are alpha-equivalent. mapping maps self's bound vars to the corresponding
        bound vars of other, other_mapping is the same from the perspective of other.
        """

    def ascii_tree(self, indent="", is_last=True):
        """Recursively displays the tree with box-drawing characters.

        Format:
        └── App
            ├── Abs (x)
            │   └── Var (x)
            └── Var (y)
        """
        result = indent + ("└── " if is_last else "├── ") + self.label + "\n"
        child_indent = indent + ("    " if is_last else "│   ")
        for idx, node in enumerate(self.nodes):
            result += node.ascii_tree(child_indent, idx == len(self.nodes) - 1)
        return result

    def __str__(self):
        return self.pretty_print()


@dataclass(frozen=True)
class Variable(LambdaTerm):
    """Reference to a bound or free identifier."""
    name: str

    @property
    def nodes(self):
        return []

    @property
    def label(self):
        return f"Var ({self.name})"

    def pretty_print(self, symbol="\\"):
        return self.name

    def sub(self, var, new_term):
        if self.name == var:
            return new_term
        return self

    def free_vars(self):
        return {self.name}

    def alpha_equals(self, other, mapping=None, other_mapping=None):
        if mapping is None:
            mapping = {}
        if other_mapping is None:
            other_mapping = {}

        if not isinstance(other, Variable):
            return False

        if self.name in mapping or other.name in other_mapping:
            return mapping.get(self.name) == other.name and other_mapping.get(other.name) == self.name
        return self.name == other.name  # both free


@dataclass(frozen=True)
class Abstraction(LambdaTerm):
    """Binder introducing param over body."""
    param: str
    body: LambdaTerm

    @property
    def nodes(self):
        return [self.body]

    @property
    def label(self):
        return f"Abs ({self.param})"

    def pretty_print(self, symbol="\\"):
        return f"{symbol}{self.param}. {self.body.pretty_print(symbol)}"

    def sub(self, var, new_term):
        if self.param == var:
            return self  # var is shadowed, nothing free to replace
        return Abstraction(self.param, self.body.sub(var, new_term))

    def free_vars(self):
        return self.body.free_vars() - {self.param}

    def alpha_equals(self, other, mapping=None, other_mapping=None):
        if mapping is None:
            mapping = {}
        if other_mapping is None:
            other_mapping = {}

        if not isinstance(other, Abstraction):
            return False

        mapping = {**mapping, self.param: other.param}
        other_mapping = {**other_mapping, other.param: self.param}

        return self.body.alpha_equals(other.body, mapping, other_mapping)


@dataclass(frozen=True)
class Application(LambdaTerm):
    """Application of func to arg. Application associates to the left: `f x y` is `(f x) y`."""
    func: LambdaTerm
    arg: LambdaTerm

    @property
    def nodes(self):
        return [self.func, self.arg]

    @property
    def label(self):
        return "App"

    def pretty_print(self, symbol="\\"):
        func = self.func.pretty_print(symbol)
        if isinstance(self.func, Abstraction):
            func = f"({func})"

        arg = self.arg.pretty_print(symbol)
        if isinstance(self.arg, (Abstraction, Application)):
            arg = f"({arg})"

        return f"{func} {arg}"

    def sub(self, var, new_term):
        return Application(self.func.sub(var, new_term), self.arg.sub(var, new_term))

    def free_vars(self):
        return self.func.free_vars() | self.arg.free_vars()

    def alpha_equals(self, other, mapping=None, other_mapping=None):
        if mapping is None:
            mapping = {}
        if other_mapping is None:
            other_mapping = {}

        if not isinstance(other, Application):
            return False

        for node, other_node in zip(self.nodes, other.nodes):
            if not node.alpha_equals(other_node, mapping, other_mapping):
                return False
        return True


def subst(var, replacement, term):
    """Replaces free occurrences of var in term with replacement (capture-unsafe, see module docstring)."""
    return term.sub(var, replacement)
