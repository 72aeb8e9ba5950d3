class KaiSDKError(RuntimeError):
    """Base class for errors raised to callers of the SDK."""
    pass


class NotInitialisedError(KaiSDKError):
    """Raised when an operation is called before the SDK was initialised."""
    pass


class NotAuthenticatedError(KaiSDKError):
    """Raised when an operation needs the service to have authenticated the module."""
    pass


class MalformedError(ValueError):
    """Raised inside the decoders when a required field is missing or mistyped.

    Never escapes the decoders; it is turned into a ``DecodeError`` value.
    """
    def __init__(self, reason):
        super().__init__(reason)
        self.reason = reason
