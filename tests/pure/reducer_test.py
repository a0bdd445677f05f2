import unittest

from untyped.lang.error import NoRuleApplies
from untyped.pure.lexical import parse
from untyped.pure.reducer import STRATEGIES, big_step, eval1, small_step, step
from untyped.pure.term import Application, Variable

TRU = "(λt.λf.t)"
FLS = "(λt.λf.f)"
AND = f"(λb.λc.((b c) {FLS}))"
ZERO = "(λs.λz.z)"
SUCC = "(λn.λs.λz.(s ((n s) z)))"

# closed programs with a normal form, and the printed result both strategies must reach
PROGRAMS = {
    "(λx.x) (λy.y)": "(λy.y)",
    "(λx. x x) (λy. y)": "(λy.y)",
    "λx.x": "(λx.x)",
    "((λx.λy.x) (λa.a)) (λb.b)": "(λa.a)",
    "((λx.λy.y) (λa.a)) (λb.b)": "(λb.b)",
    "(λx.λy.y) ((λz.z z) (λw.w))": "(λy.y)",
    "(λf.(f (λa.a))) (λx.x)": "(λa.a)",
    "(λx.λy.x y) (λy.y)": "(λy.((λy'.y') y))",
    f"({AND} {TRU}) {TRU}": "(λt.(λf.t))",
    f"({AND} {TRU}) {FLS}": "(λt.(λf.f))",
    f"({AND} {FLS}) {TRU}": "(λt.(λf.f))",
    f"{SUCC} {ZERO}": "(λs.(λz.(s (((λs'.(λz'.z')) s) z))))",
}


class Eval1TestCase(unittest.TestCase):

    def test_beta(self):
        self.assertEqual(parse("λy.y"), eval1(parse("(λx.x) (λy.y)")))
        self.assertEqual(parse("(λy.y) (λy.y)"), eval1(parse("(λx. x x) (λy. y)")))

    def test_function_steps_first(self):
        term = parse("((λx.x) (λy.y)) ((λa.a) (λb.b))")
        self.assertEqual(parse("(λy.y) ((λa.a) (λb.b))"), eval1(term))

    def test_argument_steps_when_function_cannot(self):
        term = parse("(λx.x) ((λa.a) (λb.b))")
        self.assertEqual(parse("(λx.x) (λb.b)"), eval1(term))

    def test_no_rule_applies(self):
        should_raise = [parse("λx.x"), Variable(0), Application(Variable(0), Variable(1)), parse("λx.((λy.y) x)")]
        for case in should_raise:
            self.assertRaises(NoRuleApplies, eval1, case)
            self.assertIsNone(step(case), case)


class StrategyTestCase(unittest.TestCase):

    def test_strategies(self):
        self.assertEqual({"small-step": small_step, "big-step": big_step}, STRATEGIES)

    def test_programs(self):
        for name, evaluate in STRATEGIES.items():
            for case, expected in PROGRAMS.items():
                self.assertEqual(expected, str(evaluate(parse(case))), f"{name}: {case}")

    def test_strategies_agree(self):
        for case in PROGRAMS:
            self.assertEqual(str(small_step(parse(case))), str(big_step(parse(case))), case)

    def test_values_evaluate_to_themselves(self):
        for evaluate in STRATEGIES.values():
            term = parse("λx.((λy.y) x)")
            self.assertIs(term, evaluate(term))

    def test_normal_forms_are_idempotent(self):
        for case in PROGRAMS:
            result = small_step(parse(case))
            self.assertIsNone(step(result), case)
            self.assertIs(result, small_step(result), case)
            self.assertIs(result, big_step(result), case)

    def test_reduction_leaves_no_dangling_indices(self):
        for case in PROGRAMS:
            term = parse(case)
            while term is not None:
                self.assertTrue(term.is_closed(), f"{case}: {term.de_bruijn_string()}")
                term = step(term)

    def test_round_trip(self):
        for evaluate in STRATEGIES.values():
            for case in PROGRAMS:
                printed = str(evaluate(parse(case)))
                self.assertEqual(printed, str(evaluate(parse(printed))), case)


class StuckTermTestCase(unittest.TestCase):
    """Open terms can get stuck. Small-step keeps reducing around a stuck head, big-step gives the term back as is."""

    def test_stuck_head(self):
        context = ("x",)
        term = parse("x ((λy.y) (λz.z))", context)

        self.assertEqual("(x (λz.z))", small_step(term).context_string(context))
        self.assertIs(term, big_step(term))
        self.assertEqual("(x ((λy.y) (λz.z)))", big_step(term).context_string(context))

    def test_stuck_argument(self):
        context = ("x",)
        term = parse("(λa.a) (x (λz.z))", context)

        self.assertEqual("((λa.a) (x (λz.z)))", small_step(term).context_string(context))
        self.assertIs(term, small_step(term))
        self.assertIs(term, big_step(term))

    def test_free_variable(self):
        for evaluate in STRATEGIES.values():
            self.assertEqual(Variable(3), evaluate(Variable(3)))


if __name__ == '__main__':
    unittest.main()
