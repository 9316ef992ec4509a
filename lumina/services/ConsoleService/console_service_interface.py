from abc import ABC, abstractmethod


class ConsoleServiceInterface(ABC):
    @abstractmethod
    async def start(self) -> None:
        """Read commands from the console until the user exits."""
        raise NotImplementedError

    @abstractmethod
    async def handle_line(self, line: str) -> bool:
        """Process one line of input. Returns False when the session should end."""
        raise NotImplementedError
