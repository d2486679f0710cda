"""
Exceptions --- :mod:`pliscan.exceptions`
========================================
"""


class PliscanError(Exception):
    """Base class for the errors raised by pliscan"""


class ParseError(PliscanError, ValueError):
    """A molecule could not be read

    Parameters
    ----------
    source : str
        Name of the file (or block) that failed to parse
    reason : str
        Description of the failure
    """

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"Could not read {source!r}: {reason}")
        self.source = source
        self.reason = reason

    def __reduce__(self) -> tuple:
        return (self.__class__, (self.source, self.reason))


class EmptyConformerError(ParseError):
    """The molecule does not have exactly one conformer"""


class SinkError(PliscanError, OSError):
    """The output destination cannot be created or written to"""
