"""
Cascade — Exceptions

Errors raised by the form core. These carry no HTTP semantics; the
service layer translates them into API exceptions (see core/exceptions.py).

@file cascade/exceptions.py
"""


class CascadeError(Exception):
    """Base class for every form-core error."""


class EmptyInputError(CascadeError):
    """Children were strictly requested from an index built over no entities."""


class UnknownLevelError(CascadeError):
    """A level name that is not part of the controller's chain."""

    def __init__(self, level, levels):
        self.level = level
        self.levels = tuple(levels)
        super().__init__(f'Unknown level {level!r}; expected one of {", ".join(self.levels)}.')


class SubmissionRefused(CascadeError):
    """The submitter was not called because validation produced errors."""

    def __init__(self, errors: dict[str, str]):
        self.errors = dict(errors)
        super().__init__(f'Submission refused: {len(self.errors)} field error(s).')
