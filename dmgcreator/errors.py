"""Base error type that carries a message and the error that caused it."""


class DmgCreatorError(Exception):
    """An error raised by dmgcreator, optionally wrapping the error behind it.

    The string form is ``"<message>: <cause>"`` when there is a cause, so
    nested errors read as one chain of context from the outside in.
    """

    def __init__(self, message, cause=None):
        super().__init__(message)
        self.message = message
        self.cause = cause
        if isinstance(cause, BaseException):
            self.__cause__ = cause

    def __str__(self):
        if self.cause is None:
            return self.message
        return f"{self.message}: {self.cause}"