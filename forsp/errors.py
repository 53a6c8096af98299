

class ForspError(Exception):
    """ Base class for all Forsp errors"""
    prefix = "ERROR"

    def describe(self) -> str:
        return f"{self.prefix}: {self}"


class ForspAssertionError(ForspError):
    """ Raised when an internal invariant of the interpreter is violated"""
    prefix = "ASSERT"


class ForspFailure(ForspError):
    """ Base class for failures caused by the running program"""
    prefix = "FAIL"


class ForspStackUnderflow(ForspFailure):
    """ Raised when popping from an empty value stack"""


class ForspTypeError(ForspFailure):
    """ Raised when a value has the wrong tag for an operation"""


class ForspUnboundSymbol(ForspFailure):
    """ Raised when an atom has no binding in the environment"""


class ForspSyntaxError(ForspFailure):
    """ Raised when a computation is malformed (e.g. a dangling quote)"""


class ForspEndOfInput(ForspSyntaxError):
    """ Raised when the reader runs out of input"""
