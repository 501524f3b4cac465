"""Session control for lambda-nbe. Runs pure lambda calculus one term per line, either from a file or from the
command line (see shell.py): every line is parsed, evaluated and reified, and the results are kept in order.
"""

from dataclasses import dataclass

from lambda_nbe.lang.error import GenericException
from lambda_nbe.pure.evaluator import evaluate
from lambda_nbe.pure.parser import parse
from lambda_nbe.pure.reifier import reify, shadowed_binders
from lambda_nbe.pure.term import LambdaTerm


@dataclass
class Result:
    expr: str            # source line
    term: LambdaTerm     # parsed source line
    normal: LambdaTerm   # reified value of term

    def render(self, tree=False):
        text = self.normal.pretty_print()
        if tree:
            text += "\n" + self.normal.ascii_tree().rstrip("\n")
        return text


class Session:
    """Governs a lambda-nbe session: a queue of lines to run and the results of the lines already run."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, fresh=False, tree=False, cmd_line=False):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.fresh = fresh        # whether or not to reify with fresh binder names
        self.tree = tree          # whether or not to render results with their ascii tree
        self.cmd_line = cmd_line  # whether or not in command-line mode

        self.to_exec = {}  # dict of line num: source line to run
        self.results = []  # Results that have not been popped yet

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            exprs = []
            add_to_prev = False

            try:
                with open(path, "r", encoding="utf-8") as file:
                    for line_num, line in enumerate(file):
                        __, add_to_prev = self.preprocess_line(line, line_num + 1, add_to_prev, exprs)
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

            for expr in exprs:
                self.add(*expr)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line, line_num, add_to_prev, exprs=None):
        """Preprocesses a line from a file or command-line. In command-line mode, exprs can be ignored (used to keep
        track of file's exprs as (line, line_num) tuples), but add_to_prev will indicate whether a line continuation
        is necessary. Returns updated value of line and add_to_prev.
        """
        line = line.strip()
        if exprs is not None:
            if add_to_prev and exprs:
                prev, prev_num = exprs.pop()
                line = f"{prev} {line}".strip()
                exprs.append((line, prev_num))  # continued terms are reported at their first line
            elif line:
                exprs.append((line, line_num))

        return line, line.count("(") > line.count(")")

    def add(self, expr, line_num):
        """Queues expr to be run. Evaluation is delayed until run is called."""
        self.to_exec[line_num] = expr

    def execute(self, expr):
        """Parses, evaluates and reifies expr. Raises any error encountered."""
        term = parse(expr)
        normal = reify(evaluate(term), fresh=self.fresh)

        if not self.fresh:
            for name in sorted(shadowed_binders(normal)):
                msg = "'{}' has shadowed binder '{}' (reify with fresh names to avoid this)"
                self.error_handler.warn(msg, (normal.pretty_print(), name), diagnosis=False)

        return Result(expr, term, normal)

    def run(self, echo=False):
        """Runs all queued lines in order. Every line runs under the error handler: if it isn't fatal, a failing line
        is reported and the next one still runs. If echo, results are printed (and popped) as soon as they're ready.
        """
        for line_num, expr in list(self.to_exec.items()):
            del self.to_exec[line_num]

            with self.error_handler:
                self.error_handler.register_line(self.path, expr, line_num)  # in case error is raised
                self.results.append(self.execute(expr))
                self.error_handler.remove_line(self.path)  # error was not raised

                if echo:
                    print(self.pop())

    def pop(self):
        """Removes the oldest result and returns it rendered."""
        return self.results.pop(0).render(self.tree)
