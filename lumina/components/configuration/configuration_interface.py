from abc import ABC, abstractmethod
from typing import Any, TypeVar

T = TypeVar("T")


class ConfigurationError(Exception):
    """Raised when a required configuration value is missing or unusable."""


class ConfigurationInterface(ABC):
    @abstractmethod
    def get_configuration(
        self, key: str, value_type: type[T], default: Any = None
    ) -> T:
        """
        Return the configuration value for ``key`` cast to ``value_type``.

        Raises:
            ConfigurationError: If the key is missing and no default was given,
                or if the value cannot be cast.
        """
