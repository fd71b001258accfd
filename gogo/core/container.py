"""
Service registry for gogo.

The CLI registers the settings, the logger and the presenter once per
invocation; deep call sites (process runner, loop service, ssh helpers)
look them up here instead of having them passed through every signature.
Registrations are backed by dependency-injector providers.
"""

from collections.abc import Callable
from typing import Optional, TypeVar

from dependency_injector import providers

T = TypeVar("T")


class ServiceContainer:
    """Maps an interface type to the provider that builds its instance."""

    _current: Optional["ServiceContainer"] = None

    def __init__(self) -> None:
        self._registry: dict[type, providers.Provider] = {}

    @classmethod
    def current(cls) -> "ServiceContainer":
        if cls._current is None:
            cls._current = cls()
        return cls._current

    @classmethod
    def reset(cls) -> None:
        """Forget every registration (tests call this between CLI invocations)."""
        cls._current = None

    def register_singleton(
        self,
        interface: type[T],
        implementation: T | None = None,
        factory: Callable[[], T] | None = None,
    ) -> None:
        """
        Register one shared instance of ``interface``.

        Pass a ready ``implementation``, or a ``factory`` that is called on
        first resolve. The logger uses a factory so that nothing opens a log
        file unless something actually logs.
        """
        if implementation is not None:
            provider: providers.Provider = providers.Object(implementation)
        elif factory is not None:
            provider = providers.Singleton(factory)
        else:
            raise ValueError(f"No implementation or factory given for {interface.__name__}")
        self._registry[interface] = provider

    def is_registered(self, interface: type) -> bool:
        return interface in self._registry

    def resolve(self, interface: type[T]) -> T:
        """
        Raises:
            KeyError: If ``interface`` was never registered
        """
        try:
            provider = self._registry[interface]
        except KeyError:
            raise KeyError(f"{interface.__name__} is not registered") from None
        return provider()

    def try_resolve(self, interface: type[T]) -> T | None:
        if not self.is_registered(interface):
            return None
        return self.resolve(interface)


def get_container() -> ServiceContainer:
    """The container of the running invocation."""
    return ServiceContainer.current()
