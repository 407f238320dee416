class InvariantViolation(RuntimeError):
    """The computer player or the decoder reached a state that cannot happen
    with correct scoring or well-formed data. Never recoverable."""


class PersistenceError(ValueError):
    """A saved match could not be decoded."""
