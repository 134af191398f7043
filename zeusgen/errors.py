"""
Error taxonomy for zeusgen.

Every error is fatal: the run aborts before anything is written to disk.
"""


class ZeusError(Exception):
    """Base class for all zeusgen errors."""


class ParseError(ZeusError):
    """Malformed IDL source. Carries the source position of the failure."""

    def __init__(self, message, filename=None, line=None, col=None):
        self.message = message
        self.filename = filename
        self.line = line
        self.col = col
        super().__init__(self._describe())

    def _describe(self):
        location = self.filename or "<string>"
        if self.line is not None:
            location = f"{location}:{self.line}:{self.col}"
        return f"{location}: {self.message}"


class ResolutionError(ZeusError):
    """A referenced name is absent at lookup time."""


class ValidationError(ZeusError):
    """The definitions are syntactically fine but semantically inconsistent."""


class ImportNotFoundError(ZeusError):
    """An `import` statement points to a file that cannot be located."""

    def __init__(self, path, from_file=None):
        self.path = path
        self.from_file = from_file
        if from_file:
            msg = f"cannot find '{path}' imported from '{from_file}'"
        else:
            msg = f"cannot find '{path}'"
        super().__init__(msg)
