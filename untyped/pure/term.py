"""Pure untyped lambda calculus terms, represented with de Bruijn indices.

A variable is the number of binders between it and the abstraction that binds it, so `λx.λy.x` is stored as
`(λ.(λ.1))`. Names survive only as hints on abstractions; they are never used for resolution, only to pick readable
names again when a term is printed.

Formally, a term is one of

```
<term> ::= <index>                 ; "variable"    - 0 is the nearest enclosing binder
         | "λ" <name> "." <term>   ; "abstraction" - <name> is cosmetic
         | <term> <term>           ; "application"
```

Terms are immutable: shift and sub build new trees, which may share sub-terms with the trees they came from.
"""

from abc import abstractmethod, ABC
from dataclasses import dataclass


def pick_fresh_name(context, name):
    """Returns (context with a fresh name prepended, fresh name). The fresh name is name with as many primes appended
    as needed to make it absent from context.
    """
    while name in context:
        name += "'"
    return (name,) + context, name


class LambdaTerm(ABC):
    """Superclass of the three kinds of λ-term. Also defines the shift/substitution interface that beta-reduction is
    built on.
    """

    @property
    def is_value(self):
        """Whether or not this term is a value, i.e. an Abstraction."""
        return False

    @abstractmethod
    def shift(self, d, cutoff=0):
        """Returns this term with d added to every index >= cutoff. Indices below cutoff are bound inside the term."""

    @abstractmethod
    def sub(self, j, replacement):
        """Returns this term with every Variable(j) replaced by replacement. Crossing a binder increments j and shifts
        replacement up by one, so that its free variables keep pointing at the same binders.
        """

    @abstractmethod
    def is_closed(self, depth=0):
        """Whether or not every index refers to a binder inside this term, assuming depth binders already in scope."""

    @abstractmethod
    def context_string(self, context=()):
        """Renders this term with names. context holds the names of enclosing binders, innermost first."""

    @abstractmethod
    def de_bruijn_string(self):
        """Renders this term without names."""

    def __str__(self):
        return self.context_string()


@dataclass(frozen=True, repr=False)
class Variable(LambdaTerm):
    """Reference to the binder index levels out."""
    index: int

    def shift(self, d, cutoff=0):
        if self.index < cutoff:
            return self
        return Variable(self.index + d)

    def sub(self, j, replacement):
        if self.index == j:
            return replacement
        return self

    def is_closed(self, depth=0):
        return self.index < depth

    def context_string(self, context=()):
        return context[self.index]

    def de_bruijn_string(self):
        return str(self.index)

    def __repr__(self):
        return f"Variable({self.index})"


@dataclass(frozen=True, repr=False)
class Abstraction(LambdaTerm):
    """Abstraction: binds index 0 in body. name is kept only as a printing hint."""
    name: str
    body: LambdaTerm

    @property
    def is_value(self):
        return True

    def shift(self, d, cutoff=0):
        return Abstraction(self.name, self.body.shift(d, cutoff + 1))

    def sub(self, j, replacement):
        return Abstraction(self.name, self.body.sub(j + 1, replacement.shift(1)))

    def is_closed(self, depth=0):
        return self.body.is_closed(depth + 1)

    def context_string(self, context=()):
        context, name = pick_fresh_name(context, self.name)
        return f"(λ{name}.{self.body.context_string(context)})"

    def de_bruijn_string(self):
        return f"(λ.{self.body.de_bruijn_string()})"

    def __repr__(self):
        return f"Abstraction('{self.de_bruijn_string()}')"


@dataclass(frozen=True, repr=False)
class Application(LambdaTerm):
    """Application of function to argument."""
    function: LambdaTerm
    argument: LambdaTerm

    def shift(self, d, cutoff=0):
        return Application(self.function.shift(d, cutoff), self.argument.shift(d, cutoff))

    def sub(self, j, replacement):
        return Application(self.function.sub(j, replacement), self.argument.sub(j, replacement))

    def is_closed(self, depth=0):
        return self.function.is_closed(depth) and self.argument.is_closed(depth)

    def context_string(self, context=()):
        return f"({self.function.context_string(context)} {self.argument.context_string(context)})"

    def de_bruijn_string(self):
        return f"({self.function.de_bruijn_string()} {self.argument.de_bruijn_string()})"

    def __repr__(self):
        return f"Application('{self.de_bruijn_string()}')"


def sub_top(replacement, body):
    """Beta-reduction: substitutes replacement for the variable bound by body's (removed) abstraction."""
    return body.sub(0, replacement.shift(1)).shift(-1)
