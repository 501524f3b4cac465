import io
import unittest
from contextlib import redirect_stdout

from lambda_nbe.lang.error import ErrorHandler, GenericException
from lambda_nbe.pure.lexer import UnexpectedCharacter
from lambda_nbe.pure.parser import UnexpectedEndOfInput, parse


class GenericExceptionTestCase(unittest.TestCase):

    def test_init(self):
        error = GenericException("'{}' is bad", "abc", start=1)
        self.assertEqual("abc", error.expr)
        self.assertEqual((1, 3), (error.start, error.end))
        self.assertIn("is bad", str(error))
        self.assertFalse(error.internal)

        self.assertEqual("", GenericException("keyboard interrupt").expr)


class ErrorHandlerTestCase(unittest.TestCase):

    def run_handler(self, exc, fatal=False):
        output = io.StringIO()
        with redirect_stdout(output):
            with ErrorHandler(fatal=fatal) as error_handler:
                error_handler.register_file("<test>")
                error_handler.register_line("<test>", "x $ y", 3)
                raise exc
        return output.getvalue()

    def test_diagnose(self):
        error = UnexpectedCharacter("$", 2, "x $ y")
        diagnosis = ErrorHandler.diagnose(error)
        lines = diagnosis.split("\n")
        self.assertEqual(2, len(lines))
        self.assertIn("$", lines[0])
        self.assertTrue(lines[1].startswith("    "))
        self.assertIn("^", lines[1])

    def test_diagnose_end_of_input(self):
        with self.assertRaises(UnexpectedEndOfInput) as context:
            parse("(x")
        source, marker = ErrorHandler.diagnose(context.exception).split("\n")
        self.assertIn("(x", source)
        self.assertTrue(marker.startswith("    "))
        self.assertEqual(1, marker.count("^"))
        self.assertNotIn("~", marker)

    def test_suppresses_generic_exceptions(self):
        output = self.run_handler(UnexpectedCharacter("$", 2, "x $ y"))
        self.assertIn("File '<test>', line 3", output)
        self.assertIn("unexpected character", output)

    def test_fatal(self):
        with self.assertRaises(SystemExit):
            self.run_handler(GenericException("boom"), fatal=True)

    def test_recursion_error(self):
        self.assertIn("does not terminate", self.run_handler(RecursionError()))

    def test_internal_errors_propagate(self):
        with self.assertRaises(KeyError):
            self.run_handler(KeyError("oops"))

    def test_traceback_reset(self):
        with redirect_stdout(io.StringIO()):
            with ErrorHandler(fatal=False) as error_handler:
                error_handler.register_line("<test>", "x", 1)
                raise GenericException("boom")
        self.assertEqual({"<test>": (None, None)}, error_handler.traceback)

    def test_warn(self):
        error_handler = ErrorHandler()
        error_handler.register_line("<test>", "x", 7)
        output = io.StringIO()
        with redirect_stdout(output):
            error_handler.warn("'{}' is suspicious", "x", diagnosis=False)
        self.assertIn("<test>:7:0", output.getvalue())
        self.assertIn("warning", output.getvalue())


if __name__ == '__main__':
    unittest.main()
