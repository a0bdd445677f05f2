"""Session control for the untyped interpreter: reads a program, parses it and evaluates it with one strategy."""

from untyped.lang.error import GenericException, IoError
from untyped.pure.lexical import parse
from untyped.pure.reducer import STRATEGIES


class Session:
    """Governs one interpreter run. Reduction is lazy and is delayed until run is called."""

    def __init__(self, path=None, strategy="small-step"):
        if strategy not in STRATEGIES:
            raise GenericException("unknown evaluation strategy {}", strategy, internal=True)

        self.path = path          # None if source is added by hand
        self.strategy = strategy  # key of STRATEGIES
        self.term = None          # parsed program, set by add

        if path is not None:
            self.add(Session.read(path))

    @staticmethod
    def read(path):
        """Returns the contents of path decoded as UTF-8. Failing to open or decode the file is an IoError."""
        try:
            with open(path, "rb") as file:
                data = file.read()
        except OSError as error:
            raise IoError(str(error)) from None

        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as error:
            raise IoError(f"'{path}' is not valid UTF-8: {error.reason}") from None

    def add(self, source):
        """Parses source as this session's program. Any parse error is raised immediately."""
        self.term = parse(source)

    def run(self):
        """Evaluates the program with this session's strategy and returns the result."""
        if self.term is None:
            raise GenericException("no program to run", internal=True)
        return STRATEGIES[self.strategy](self.term)
