import unittest

from lambda_nbe.pure.parser import parse
from lambda_nbe.pure.term import Abstraction, Application, Variable, subst


x, y, z = Variable("x"), Variable("y"), Variable("z")


class PrettyPrintTestCase(unittest.TestCase):

    def test_pretty_print(self):
        cases = {
            x: "x",
            Abstraction("x", x): "\\x. x",
            Application(Variable("f"), x): "f x",
            Application(Abstraction("x", Abstraction("y", x)), Variable("a")): "(\\x. \\y. x) a",
            Application(Application(Variable("f"), x), y): "f x y",
            Application(Variable("f"), Application(x, y)): "f (x y)",
            Application(Variable("f"), Abstraction("x", x)): "f (\\x. x)",
            Abstraction("x", Application(x, y)): "\\x. x y",
            Application(Application(x, y), Abstraction("z", z)): "x y (\\z. z)",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, case.pretty_print(), expected)
            self.assertEqual(expected, str(case), expected)

    def test_symbol(self):
        self.assertEqual("λf. λx. f x", parse("\\f. \\x. f x").pretty_print("λ"))


class AsciiTreeTestCase(unittest.TestCase):

    def test_ascii_tree(self):
        self.assertEqual("└── Var (x)\n", x.ascii_tree())

        expected = ("└── App\n"
                    "    ├── Abs (x)\n"
                    "    │   └── App\n"
                    "    │       ├── Var (x)\n"
                    "    │       └── Var (x)\n"
                    "    └── Var (y)\n")
        self.assertEqual(expected, parse("(\\x. x x) y").ascii_tree())

    def test_deterministic(self):
        term = parse("(\\f. \\x. f (f x)) g a")
        self.assertEqual(term.ascii_tree(), parse(term.pretty_print()).ascii_tree())


class SubstitutionTestCase(unittest.TestCase):

    def test_subst(self):
        cases = {
            (x, y): y,
            (z, y): z,
            (Application(y, x), y): Application(y, y),
            (Abstraction("z", Application(x, z)), y): Abstraction("z", Application(y, z)),
            (Application(x, Abstraction("x", x)), y): Application(y, Abstraction("x", x)),
        }
        for (term, replacement), expected in cases.items():
            self.assertEqual(expected, subst("x", replacement, term), term)

    def test_binder_shadows(self):
        bodies = [x, y, Application(x, y), Abstraction("y", x)]
        for body in bodies:
            for replacement in [y, Abstraction("z", z), Application(x, x)]:
                self.assertEqual(Abstraction("x", body), subst("x", replacement, Abstraction("x", body)), body)

    def test_capture_is_not_avoided(self):
        # y is free in the replacement and gets captured by λy
        self.assertEqual(Abstraction("y", y), subst("x", y, Abstraction("y", x)))

    def test_original_untouched(self):
        term = parse("\\y. x (\\z. x)")
        subst("x", z, term)
        self.assertEqual(parse("\\y. x (\\z. x)"), term)


class FreeVarsTestCase(unittest.TestCase):

    def test_free_vars(self):
        cases = {
            "x": {"x"},
            "\\x. x": set(),
            "\\x. x y": {"y"},
            "(\\x. x) x": {"x"},
            "\\f. \\x. f (g x) z": {"g", "z"},
        }
        for case, expected in cases.items():
            self.assertEqual(expected, parse(case).free_vars(), case)


class AlphaEqualsTestCase(unittest.TestCase):

    def test_alpha_equals(self):
        should_pass = [
            ("x", "x"),
            ("\\x. x", "\\y. y"),
            ("\\x. \\y. x", "\\a. \\b. a"),
            ("\\x. \\y. x", "\\y. \\x. y"),
            ("\\x. x z", "\\y. y z"),
            ("(\\x. x) (\\y. y)", "(\\a. a) (\\b. b)"),
        ]
        for case, other in should_pass:
            self.assertTrue(parse(case).alpha_equals(parse(other)), case)

        should_fail = [
            ("x", "y"),
            ("\\x. x", "\\x. y"),
            ("\\x. \\y. x", "\\x. \\x. x"),
            ("\\x. \\y. x", "\\x. \\y. y"),
            ("\\x. y", "\\y. y"),
            ("x y", "\\x. y"),
        ]
        for case, other in should_fail:
            self.assertFalse(parse(case).alpha_equals(parse(other)), case)


if __name__ == '__main__':
    unittest.main()
