# Standard library imports
from typing import Any, Callable, Dict, Type, TypeVar

T = TypeVar("T")


class BaseContainer:
    """
    Minimal type-keyed dependency registry.

    Singletons are stored as created; factories are invoked on first lookup
    and their result cached, so every dependency exists once per container.
    """

    def __init__(self) -> None:
        self._singletons: Dict[Type[Any], Any] = {}
        self._factories: Dict[Type[Any], Callable[[], Any]] = {}

    def register_singleton(self, key: Type[T], instance: T) -> None:
        self._singletons[key] = instance

    def register_factory(self, key: Type[T], factory: Callable[[], T]) -> None:
        self._factories[key] = factory

    def is_registered(self, key: Type[Any]) -> bool:
        return key in self._singletons or key in self._factories

    def get(self, key: Type[T]) -> T:
        """
        Resolve a dependency.

        Raises:
            ValueError: If nothing is registered for ``key``
        """
        if key in self._singletons:
            return self._singletons[key]
        factory = self._factories.get(key)
        if factory is None:
            raise ValueError(f"No registration for {key.__name__}")
        instance = factory()
        self._singletons[key] = instance
        return instance
