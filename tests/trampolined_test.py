import unittest
from itertools import islice

from evaluator.combinators import IDENTITY, OMEGA, tail_chain
from evaluator.error import NotApplicable, StepLimitExceeded, UnboundVariable
from evaluator.term import Abstraction, Application, Variable, apply
from evaluator.trampoline import Complete, advance, iterate, run, run_bounded
from evaluator.trampolined import evaluate, evaluate_trampolined
from evaluator.value import Closure, Environment

IDENTITY_VALUE = Closure(Environment(), "x", Variable("x"))


class TrampolinedEvaluatorTestCase(unittest.TestCase):

    def test_variable(self):
        env = Environment({"i": IDENTITY_VALUE})
        self.assertEqual(Complete(IDENTITY_VALUE), evaluate_trampolined(Variable("i"), env))

        # nothing to defer, so the error is raised straight away
        with self.assertRaises(UnboundVariable) as context:
            evaluate_trampolined(Variable("x"), Environment())
        self.assertEqual("x", context.exception.name)

    def test_abstraction(self):
        self.assertEqual(Complete(IDENTITY_VALUE), evaluate_trampolined(IDENTITY, Environment()))

    def test_application(self):
        term = Application(Abstraction("x", Variable("x")), Abstraction("y", Variable("y")))
        trampoline = evaluate_trampolined(term, Environment())
        self.assertFalse(trampoline.complete)

        trampoline = advance(trampoline)
        self.assertEqual(Complete(Closure(Environment(), "y", Variable("y"))), trampoline)

    def test_application_is_deferred(self):
        trampoline = evaluate_trampolined(apply(Variable("missing"), IDENTITY), Environment())
        self.assertFalse(trampoline.complete)

        with self.assertRaises(UnboundVariable) as context:
            run(trampoline)
        self.assertEqual("missing", context.exception.name)

    def test_not_applicable(self):
        with self.assertRaises(NotApplicable) as context:
            evaluate(apply(Variable("k"), IDENTITY), Environment({"k": "not a closure"}))
        self.assertEqual("not a closure", context.exception.value)

    def test_evaluate(self):
        self.assertEqual(IDENTITY_VALUE, evaluate(apply(IDENTITY, IDENTITY)))
        self.assertEqual(IDENTITY_VALUE, evaluate(Variable("i"), Environment({"i": IDENTITY_VALUE})))

    def test_omega_stack_safety(self):
        with self.assertRaises(StepLimitExceeded) as context:
            run_bounded(evaluate_trampolined(OMEGA, Environment()), 50_000)
        self.assertFalse(context.exception.trampoline.complete)

        states = islice(iterate(evaluate_trampolined(OMEGA, Environment())), 10_000)
        self.assertFalse(any(state.complete for state in states))

    def test_tail_chain(self):
        cases = [0, 1, 20_000]  # 20_000 nested calls, far past the recursion limit
        for case in cases:
            self.assertEqual(IDENTITY_VALUE, evaluate(tail_chain(case)), case)

        steps = sum(1 for __ in iterate(evaluate_trampolined(tail_chain(10), Environment()))) - 1
        self.assertEqual(11, steps)


if __name__ == '__main__':
    unittest.main()
