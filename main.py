import asyncio
import os

from lumina.bootstrap.bootstrapper import bootstrap_app
from lumina.services.ConsoleService.console_service_interface import (
    ConsoleServiceInterface,
)


async def main():
    env = os.getenv("LUMINA_ENV", "development")
    console: ConsoleServiceInterface = await bootstrap_app(env=env)
    await console.start()


if __name__ == "__main__":
    asyncio.run(main())
