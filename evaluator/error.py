"""Error handling for the evaluators. Only EvaluationErrors should be encountered during evaluation: if another type of
error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue. The one exception is
RecursionError, which is how the naive evaluator runs out of native stack.
"""

import sys

from termcolor import colored


class EvaluationError(Exception):
    """Templates an error/warning message so that it can be used to report an evaluation error. msg is a format string
    whose slots are filled with exprs (bolded when displayed).
    """

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        """Parses args for EvaluationError or warning."""
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]
        exprs = [str(expr) for expr in exprs]

        super().__init__(msg.format(*exprs))
        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0]  # exprs[0] should be the offending expr that caused the error
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal


class UnboundVariable(EvaluationError):
    """A variable was looked up in an environment that has no binding for it."""

    def __init__(self, name):
        super().__init__("variable '{}' is not bound", name)
        self.name = name


class NotApplicable(EvaluationError):
    """The function position of an application evaluated to something other than a closure."""

    def __init__(self, value, term):
        super().__init__("'{}' evaluated to '{}', which is not a closure and cannot be applied", (term, value))
        self.value = value
        self.term = term


class StepLimitExceeded(EvaluationError):
    """A bounded trampoline run used up its step budget. trampoline is the last (still pending) state, so the run can
    be resumed by the caller.
    """

    def __init__(self, max_steps, trampoline):
        super().__init__("evaluation did not complete within {} steps", str(max_steps), diagnosis=False)
        self.max_steps = max_steps
        self.trampoline = trampoline


class ErrorHandler:
    """Context manager that will silently suppress Python errors and report evaluation errors/warnings."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.traceback = {}

    def register_term(self, label, expr):
        """Registers the term being evaluated under label. Should be called prior to evaluation."""
        self.traceback[label] = str(expr)

    def remove_term(self, label):
        """Removes label from traceback. Should be called after successful evaluation."""
        self.traceback.pop(label, None)

    @staticmethod
    def diagnose(error, source=None, warning=False):
        """Returns source with the offending part (error.expr) highlighted and bolded, plus a caret line beneath it."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        if source is None or error.expr not in source:
            source = error.expr
        start = source.index(error.expr) + error.start
        end = max(source.index(error.expr) + error.end, start + 1)

        diagnosis = "  " + source[:start]
        diagnosis += colored(source[start:end], color, attrs=["bold"])
        diagnosis += source[end:] + "\n"

        diagnosis += "  " + " " * start
        diagnosis += colored("^" + "~" * (end - start - 1), color, attrs=["bold"])

        return diagnosis

    def _source(self):
        """Most recently registered term, or None."""
        if self.traceback:
            return list(self.traceback.values())[-1]
        return None

    def warn(self, *args, **kwargs):
        """Generates and prints runtime warning message based on args."""
        error = EvaluationError(*args, **kwargs)

        error_msg = colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error, self._source(), warning=True))

    def throw(self, error):
        """Prints error along with self.traceback, which maps labels to the terms that were being evaluated when error
        was raised.
        """
        error_msg = ""
        for label, expr in self.traceback.items():  # assumes dict is insertion-ordered
            error_msg += f"  In '{label}':\n"
            error_msg += f"    {expr}\n"

        if len(self.traceback) > 1:
            error_msg = "Traceback:\n" + error_msg

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error, self._source()))

        if self.fatal:
            sys.exit(1)
        self.traceback = {}  # if error occurred, reset traceback (no need if error is fatal)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type in (SystemExit, KeyboardInterrupt):
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(EvaluationError("maximum recursion depth exceeded (try the trampolined evaluator)"))
        elif exc_type is not None and issubclass(exc_type, EvaluationError):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(EvaluationError("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}", internal=True))
            do_exit = True

        return not do_exit
