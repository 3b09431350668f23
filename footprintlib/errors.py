"""Exception hierarchy for FootprintLib.

Every failure raised by the library derives from FootprintError so callers
can catch library problems in one place. None of these are recoverable: a
diagnostic measurement that hits one of them has no meaningful result.
"""


class FootprintError(Exception):
    """Base class for all FootprintLib errors."""
    pass


class CountOverflowError(FootprintError):
    """Raised when a primitive occurrence count would exceed its maximum.

    The accumulator state can no longer be trusted, so the traversal aborts.
    """
    pass


class IntrospectionError(FootprintError):
    """Raised when a member value cannot be read from an object.

    Unset slots are not errors; anything else that goes wrong while reading
    a member is reported through this exception.
    """

    def __init__(self, owner: object, member: str, cause: BaseException):
        self.owner_type = type(owner)
        self.member = member
        self.cause = cause
        super().__init__(
            f"Cannot read member {member!r} of {self.owner_type.__name__}: "
            f"{type(cause).__name__}: {cause}"
        )


class InvalidConfigError(FootprintError, ValueError):
    """Raised when a MeasureConfig fails validation."""
    pass
