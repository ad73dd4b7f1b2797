## kari — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘


class KariError(Exception):
    def __init__(self, message: str = "", *, span=None):
        """Base class for all Kari-raised errors."""
        super().__init__(message)
        self.span = span
        # Call-site spans collected while unwinding, innermost call first.
        self.stack_trace: list = []

    def spans(self) -> list:
        return [self.span] if self.span is not None else []


class KariTokenizerError(KariError, ValueError):
    """Malformed literal or character found while scanning source text."""
    pass


class KariParseError(KariError):
    pass

class KariUnexpectedToken(KariParseError):
    def __init__(self, message, *, token):
        super().__init__(message, span=token.span)
        self.token = token

class KariIncompleteParse(KariParseError):
    """Input ended while a list was still open; `span` is its opening bracket."""
    pass


class KariStackError(KariError):
    pass

class KariTypeError(KariStackError, TypeError):
    def __init__(self, message: str = "", *, expected: str, actual, span=None):
        super().__init__(message, span=span if span is not None else actual.span)
        self.expected = expected
        self.actual = actual

class KariStackEmpty(KariStackError, IndexError):
    pass


class KariNameError(KariError, NameError):
    """No function registered under this name matches the stack content."""
    def __init__(self, message: str = "", *, name: str, span=None):
        super().__init__(message, span=span)
        self.name = name


class KariFailure(KariError, RuntimeError):
    pass

class KariOverflowError(KariError, OverflowError):
    """Arithmetic result outside the range of 32-bit unsigned numbers."""
    pass


class KariTypeMissing(KariError, TypeError):
    pass

class KariSignatureError(KariError, TypeError):
    """Loading-time problems from builtin annotations, usually from Python-side."""
    pass
