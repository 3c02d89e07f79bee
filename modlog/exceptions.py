class ServiceLocatorError(Exception):
    """Base class for errors raised by the service registry."""


class InvalidTokenError(ServiceLocatorError):
    """Exception raised when registering a service under an empty token.

    Attributes:
        token: the rejected token value
    """

    def __init__(self, token=None):
        self.token = token
        super().__init__(f"Invalid token: {token}")


class ServiceNotFoundError(ServiceLocatorError):
    """Exception raised when a required service was never registered.

    Attributes:
        token_name: display name of the token that was looked up
    """

    def __init__(self, token_name: str):
        self.token_name = token_name
        super().__init__(f"Service with token {token_name} was not found")


class ConfigurationError(Exception):
    """Exception raised for invalid logging configuration values.

    Attributes:
        key: configuration key that didn't pass validation
        reason: reason of validation error
    """

    def __init__(self, key: str, reason=""):
        self.key = key
        self.reason = reason
        super().__init__(f"Invalid logging configuration for '{key}'. {reason}")
