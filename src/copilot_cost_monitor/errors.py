class MonitorError(Exception):
    """
    MonitorError is the base of every failure surfaced to the
    presenter. str() of the error is the human-readable message.
    """

    def __init__(self, message: "str") -> "None":
        self.message = message
        super().__init__(message)


class ConfigurationError(MonitorError):
    """
    raised when the identity or the credential is missing.
    This is a user-actionable condition, not a failure.
    """

    def __init__(self, missing: "str") -> "None":
        self.missing = missing
        super().__init__(f"GitHub {missing} is not configured.")


class AuthError(MonitorError):
    def __init__(self) -> "None":
        super().__init__(
            "Authentication failed. Check your Token, scopes, or expiration."
        )


class NotFoundError(MonitorError):
    def __init__(self) -> "None":
        super().__init__("User not found or endpoint not available.")


class UpstreamError(MonitorError):
    def __init__(self, status_code: "int") -> "None":
        self.status_code = status_code
        super().__init__(f"API request failed with status {status_code}")


class NetworkError(MonitorError):
    def __init__(self, cause: "BaseException") -> "None":
        self.cause = cause
        super().__init__(f"Network error: {cause}")


class CacheAnomaly(MonitorError):
    """
    raised when the server keeps answering "not modified" while
    nothing is cached, even after an unconditional re-fetch.
    """

    def __init__(self) -> "None":
        super().__init__(
            "Server reported no changes but no cached cost is available."
        )
