import os
from pathlib import Path
from typing import Any, TypeVar, cast

from dotenv import dotenv_values

from lumina.components.configuration.configuration_interface import (
    ConfigurationError,
    ConfigurationInterface,
)

T = TypeVar("T")

_TRUTHY = ("true", "1", "yes")


class Configuration(ConfigurationInterface):
    """
    Environment-aware settings store.

    Values come from ``<config_path>/<env>.env`` when that file exists, with the
    process environment taking precedence over the file.
    """

    def __init__(self, env: str, config_path: str) -> None:
        self.env = env
        self.config_path = config_path
        self.__values: dict[str, str | None] = self.__load_file_values()

    def __load_file_values(self) -> dict[str, str | None]:
        env_file = Path(self.config_path) / f"{self.env}.env"
        if not env_file.is_file():
            return {}
        return dict(dotenv_values(env_file))

    def __lookup(self, key: str) -> str | None:
        if key in os.environ:
            return os.environ[key]
        return self.__values.get(key)

    def get_configuration(
        self, key: str, value_type: type[T], default: Any = None
    ) -> T:
        raw = self.__lookup(key)

        if raw is None or raw.strip() == "":
            if default is None:
                raise ConfigurationError(
                    f"{key} is not defined in the environment or in {self.env}.env."
                )
            return cast(T, default)

        raw = raw.strip()

        if value_type is bool:
            return cast(T, raw.lower() in _TRUTHY)

        try:
            return value_type(raw)  # type: ignore[call-arg]
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(
                f"{key}={raw!r} cannot be read as {value_type.__name__}"
            ) from exc
