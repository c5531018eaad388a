import unittest
from unittest.mock import patch

from evaluator.combinators import IDENTITY, OMEGA
from evaluator.error import EvaluationError
from evaluator.naive import evaluate_naive
from evaluator.numerical import MULT, PLUS, PRED, SUCC, cnumber, number, number_of
from evaluator.term import Variable, abstract, apply
from evaluator.trampolined import evaluate
from evaluator.value import Environment

f, x = Variable("f"), Variable("x")


class NumericalTestCase(unittest.TestCase):

    def test_cnumber(self):
        should_fail = [-2, 0.3, 4.0, True, "3", None]
        for case in should_fail:
            self.assertRaises(EvaluationError, cnumber, case)

        should_pass = {0: "λf.λx.x", 1: "λf.λx.(f x)", 3: "λf.λx.(f (f (f x)))"}
        for case, result in should_pass.items():
            self.assertEqual(result, cnumber(case).expr)

    def test_number(self):
        should_fail = [abstract("fx", apply(f, f)), abstract("fx", apply(x, f, x)), IDENTITY, abstract("fx", f), x]
        for case in should_fail:
            self.assertIsNone(number(case), case)

        should_pass = [
            (0, cnumber(0)),
            (5, cnumber(5)),
            (2, abstract("ab", apply(Variable("a"), apply(Variable("a"), Variable("b"))))),
            (0, abstract("xx", x)),
        ]
        for result, case in should_pass:
            self.assertEqual(result, number(case), case)

        self.assertEqual(4, number(evaluate(cnumber(4))))  # closures decode like their abstraction

    def test_number_of(self):
        cases = [
            (0, cnumber(0)),
            (3, cnumber(3)),
            (3, apply(SUCC, cnumber(2))),
            (2, apply(PRED, cnumber(3))),
            (5, apply(PLUS, cnumber(2), cnumber(3))),
            (6, apply(MULT, cnumber(2), cnumber(3))),
            (1, IDENTITY),  # λf.f behaves like 1
        ]
        for result, case in cases:
            self.assertEqual(result, number_of(evaluate(case)), case)

        self.assertEqual(0, number_of(evaluate(apply(PRED, cnumber(0)))))
        self.assertEqual(1, number_of(evaluate_naive(apply(PRED, cnumber(2)), Environment())))

    def test_number_of_non_numerals(self):
        should_fail = [abstract("fx", f), abstract("fx", Variable("free")), abstract("fx", apply(f, f))]
        for case in should_fail:
            self.assertIsNone(number_of(evaluate(case)), case)

        self.assertIsNone(number_of(42))

        with patch("evaluator.numerical.NUMBER_STEPS", 1_000):
            self.assertIsNone(number_of(evaluate(abstract("fx", OMEGA))))


if __name__ == '__main__':
    unittest.main()
