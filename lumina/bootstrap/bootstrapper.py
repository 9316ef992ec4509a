from lumina.dependencies.components import get_components
from lumina.dependencies.services import get_console_service
from lumina.services.ConsoleService.console_service_interface import (
    ConsoleServiceInterface,
)


async def bootstrap_app(
    env: str = "development",
    config_path: str = "configuration",
) -> ConsoleServiceInterface:
    components = get_components(env=env, config_path=config_path)
    console: ConsoleServiceInterface = get_console_service(components)
    return console
