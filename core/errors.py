"""Error types shared across layers."""


class DoneItError(Exception):
    """Base error for the todo document."""


class DocumentFormatError(DoneItError, ValueError):
    """Persisted document does not have the expected shape."""


class InternalConsistencyError(DoneItError, LookupError):
    """A handle or id failed to resolve.

    Raised only when a caller dereferences something the store no longer
    holds. The command engine derives every handle from the live tree, so
    reaching this is a programmer error and must not be shown to the user.
    """


__all__ = ["DoneItError", "DocumentFormatError", "InternalConsistencyError"]
