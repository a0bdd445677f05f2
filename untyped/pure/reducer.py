"""Call-by-value evaluation of pure lambda calculus terms.

Two strategies are implemented and must agree on every closed term that has a normal form:
    1. Small-step: apply the one-step relation eval1 until no rule applies.
    2. Big-step: recursively evaluate function and argument to values, then the substituted body.

Neither strategy reduces under an abstraction, and neither bounds the number of steps: a term without a normal form
makes both run until they run out of time or stack.
"""

from untyped.lang.error import NoRuleApplies
from untyped.pure.term import Abstraction, Application, sub_top


def eval1(term):
    """One step of reduction. Raises NoRuleApplies if term is a normal form."""
    if not isinstance(term, Application):
        raise NoRuleApplies(term)

    function, argument = term.function, term.argument
    if isinstance(function, Abstraction) and argument.is_value:
        return sub_top(argument, function.body)

    try:
        return Application(eval1(function), argument)
    except NoRuleApplies:
        return Application(function, eval1(argument))


def step(term):
    """Returns term after one step of reduction, or None if no rule applies."""
    try:
        return eval1(term)
    except NoRuleApplies:
        return None


def small_step(term):
    """Reduces term with eval1 until it is in normal form. The result is not necessarily a value."""
    while True:
        reduced = step(term)
        if reduced is None:
            return term
        term = reduced


def big_step(term):
    """Evaluates term to a value. A stuck application is returned as is, without any of its sub-terms evaluated."""
    if not isinstance(term, Application):
        return term

    function = big_step(term.function)
    if not isinstance(function, Abstraction):
        return term

    argument = big_step(term.argument)
    if not argument.is_value:
        return term

    return big_step(sub_top(argument, function.body))


STRATEGIES = {
    "small-step": small_step,
    "big-step": big_step,
}
