"""
Service Locator - token based registry of singleton services

Services are registered and looked up by ServiceToken objects. Tokens are
compared by identity, so two tokens sharing a display name are two distinct
keys. The registry is a plain object owned by the host application and handed
to whoever needs it; there is no process-wide instance.

Usage:
    from modlog.service_locator import ServiceRegistry, ServiceToken

    DATABASE = ServiceToken("DATABASE")

    registry = ServiceRegistry()
    registry.register(DATABASE, connection)
    registry.resolve(DATABASE)        # raises ServiceNotFoundError if missing
    registry.try_resolve(DATABASE)    # returns None if missing
"""

from threading import Lock

from beartype.typing import Any, Dict, Generic, Optional, TypeVar

from modlog.exceptions import InvalidTokenError, ServiceNotFoundError

T = TypeVar("T")


class ServiceToken(Generic[T]):
    """Opaque registry key. Equality and hashing are by identity."""

    def __init__(self, name: str):
        self.name = name

    def __repr__(self):
        return f"ServiceToken({self.name!r})"


class ServiceRegistry:
    """
    Mapping from ServiceToken to a registered value.

    Writes are serialized with a lock. Reads are plain dict lookups so the
    logging hot path never waits on a registration.
    """

    def __init__(self):
        self._services: Dict[ServiceToken, Any] = {}
        self._lock = Lock()

    def register(self, token: ServiceToken[T], service: T):
        """
        Register a service, replacing any value previously stored for the token.

        Args:
            token: Registry key
            service: Value to store

        Raises:
            InvalidTokenError: token is None
        """
        if token is None:
            raise InvalidTokenError(token)

        with self._lock:
            self._services[token] = service

    def resolve(self, token: ServiceToken[T]) -> T:
        """
        Look up a service that must be registered.

        Raises:
            ServiceNotFoundError: nothing registered for the token
        """
        if token not in self._services:
            raise ServiceNotFoundError(getattr(token, "name", str(token)))

        return self._services[token]

    def try_resolve(self, token: ServiceToken[T]) -> Optional[T]:
        """Look up a service, returning None if it is not registered."""
        return self._services.get(token)

    def is_registered(self, token: ServiceToken) -> bool:
        return token in self._services

    def unregister(self, token: ServiceToken):
        with self._lock:
            self._services.pop(token, None)

    def clear(self):
        """Drop every registration. Useful for testing."""
        with self._lock:
            self._services.clear()
