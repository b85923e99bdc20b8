from __future__ import annotations


class StroomError(Exception):
    """Base class for all exceptions raised by the stroom library."""

    pass


class ContractViolationError(StroomError):
    """Raised when a caller breaks the reduction contract."""

    pass


class ContinuationError(ContractViolationError):
    """Raised when a continuation is resumed more than once.

    A continuation captures one paused position of a reduction. Resuming it
    consumes that position, so a second resume has nothing left to continue
    from.
    """

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"Continuation '{name}' has already been resumed; "
            f"a paused reduction can only be resumed once."
        )


class InvalidSourceError(StroomError, TypeError):
    """Raised when an object can be used neither as a producer nor as an iterable."""

    def __init__(self, source: object):
        self.source = source
        super().__init__(
            f"Cannot reduce object of type '{type(source).__name__}': "
            f"expected a Producer or an iterable."
        )
