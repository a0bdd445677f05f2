"""Error handling for the untyped interpreter. Only GenericExceptions should be encountered during running: if another
type of error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

The pure modules never print or exit. They raise, and ErrorHandler alone turns an exception into a diagnostic and an
exit status.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error message so that it can be thrown as an untyped error. Every argument in tokens is quoted
    before being substituted into msg.
    """
    status = 1
    show_usage = False

    def __init__(self, msg="", *tokens, internal=False):
        self.msg = msg.format(*(f"\"{token}\"" for token in tokens)) if tokens else msg
        self.tokens = tokens
        self.internal = internal
        super().__init__(self.msg)


class UsageError(GenericException):
    """Wrong or missing command-line arguments. Only the usage text is shown."""
    status = 2
    show_usage = True


class IoError(GenericException):
    """Input file could not be opened or decoded. The reason is shown, then the usage text."""
    status = 2
    show_usage = True


class UnexpectedToken(GenericException):
    """A token that cannot start an atom, or the end of input where an atom was expected."""

    def __init__(self, got):
        super().__init__("unexpected token {}", got)


class ExpectedToken(GenericException):
    """The parser needed a specific token and found another one (or the end of input)."""

    def __init__(self, want, got):
        super().__init__("expected token {}, got {}", want, got)


class ExpectedIdentifier(GenericException):
    """An abstraction is missing the name it binds."""

    def __init__(self, got):
        super().__init__("expected identifier, got {}", got)


class UndefinedVariable(GenericException):
    """A name that no enclosing abstraction binds."""

    def __init__(self, name):
        super().__init__("undefined variable {}", name)


class NoRuleApplies(GenericException):
    """Raised by the one-step evaluator when the term has no reduct. Callers are expected to catch it."""

    def __init__(self, term=None):
        super().__init__("no rule applies")
        self.term = term


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom untyped errors."""
    ERROR = "red"

    def __init__(self, fatal=True, usage=None, stream=None):
        self.fatal = fatal
        self.usage = usage    # printed after errors that ask for it (usage/io errors)
        self.stream = stream  # defaults to sys.stderr at throw time, so that redirection is honored

    def throw(self, error):
        """Prints error to the error stream and, if self.fatal, exits with the error's status. error must be a
        GenericException.
        """
        stream = self.stream if self.stream is not None else sys.stderr
        no_color = not (hasattr(stream, "isatty") and stream.isatty())

        error_msg = error.msg
        if error.internal:
            error_msg = "[internal] " + error_msg

        if error_msg:
            print(colored(error_msg, ErrorHandler.ERROR, no_color=no_color), file=stream)
        if error.show_usage and self.usage:
            print(self.usage, file=stream, end="" if self.usage.endswith("\n") else "\n")

        if self.fatal:
            sys.exit(error.status)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))

        return not do_exit
