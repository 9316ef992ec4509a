from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Literal

from lumina.services.ConsoleService.console_service_interface import (
    ConsoleServiceInterface,
)
from lumina.views.chat_view import ChatView
from lumina.views.image_analyzer_view import ImageAnalyzerView
from lumina.views.image_view import ImageView
from lumina.views.story_writer_view import StoryWriterView

Mode = Literal["story", "analyze", "chat"]

MODES: tuple[Mode, ...] = ("story", "analyze", "chat")

HELP_MESSAGE = (
    "Lumina | Creative Muse\n\n"
    "  /mode story|analyze|chat  switch mode\n"
    "  /image <path>             load an image for the current mode\n"
    "  /story                    write a story about the loaded image\n"
    "  /speak                    read the story aloud\n"
    "  /prompt <text>            set the analysis prompt\n"
    "  /analyze [prompt]         analyze the loaded image\n"
    "  /clear                    start a new chat\n"
    "  /exit                     quit\n\n"
    "In chat mode, any other text is sent to the model."
)

UNEXPECTED_ERROR_MESSAGE = "Something went wrong. Please try again."


async def read_console_line(prompt: str = "> ") -> str | None:
    try:
        return await asyncio.to_thread(input, prompt)
    except EOFError:
        return None


class ConsoleService(ConsoleServiceInterface):
    def __init__(
        self,
        story_view: StoryWriterView,
        analyzer_view: ImageAnalyzerView,
        chat_view: ChatView,
        logger: logging.Logger,
        read_line: Callable[[], Awaitable[str | None]] = read_console_line,
        write: Callable[[str], None] = print,
    ) -> None:
        self.story_view = story_view
        self.analyzer_view = analyzer_view
        self.chat_view = chat_view
        self.logger = logger
        self.read_line = read_line
        self.write = write
        self.mode: Mode = "story"

    async def start(self) -> None:
        self.logger.info("Starting console session in %s mode", self.mode)
        self.write(HELP_MESSAGE)
        while True:
            line = await self.read_line()
            if line is None:
                break
            try:
                keep_going = await self.handle_line(line)
            except Exception as error:
                self.logger.error(
                    "Error handling input %r: %s", line, error, exc_info=True
                )
                self.write(UNEXPECTED_ERROR_MESSAGE)
                continue
            if not keep_going:
                break
        self.logger.info("Console session ended.")

    async def handle_line(self, line: str) -> bool:
        text = line.strip()
        if not text:
            return True

        if not text.startswith("/"):
            await self._handle_text(text)
            return True

        command, _, argument = text.partition(" ")
        command = command.lower()
        argument = argument.strip()

        if command in ("/exit", "/quit"):
            return False

        handlers: dict[str, Callable[[str], Awaitable[None]]] = {
            "/help": self._handle_help_command,
            "/mode": self._handle_mode_command,
            "/image": self._handle_image_command,
            "/story": self._handle_story_command,
            "/speak": self._handle_speak_command,
            "/prompt": self._handle_prompt_command,
            "/analyze": self._handle_analyze_command,
            "/clear": self._handle_clear_command,
        }
        handler = handlers.get(command)
        if handler is None:
            self.write(f"Unknown command {command}. Type /help for the list.")
            return True

        await handler(argument)
        return True

    def _image_view_for(self, mode: Mode) -> ImageView | None:
        if mode == "story":
            return self.story_view
        if mode == "analyze":
            return self.analyzer_view
        return None

    def _active_image_view(self) -> ImageView | None:
        return self._image_view_for(self.mode)

    def _leave_mode(self, mode: Mode) -> None:
        # Leaving a mode discards its state, the way closing its screen would.
        view = self._image_view_for(mode)
        if view is None:
            self.chat_view.clear()
        else:
            view.reset()

    async def _handle_text(self, text: str) -> None:
        if self.mode != "chat":
            self.write("Switch to chat with /mode chat, or type /help.")
            return

        reply = await self.chat_view.send(text)
        if reply is None:
            self.write("Still thinking about the previous message...")
            return
        self.write(reply.text)

    async def _handle_help_command(self, argument: str) -> None:
        self.write(HELP_MESSAGE)

    async def _handle_mode_command(self, argument: str) -> None:
        requested = argument.lower()
        if requested not in MODES:
            self.write(f"Current mode: {self.mode}. Available: {', '.join(MODES)}")
            return
        if requested != self.mode:
            self._leave_mode(self.mode)
        self.mode = requested  # type: ignore[assignment]
        self.write(f"Mode: {self.mode}")

    async def _handle_image_command(self, argument: str) -> None:
        view = self._active_image_view()
        if view is None:
            self.write("Images are used in story and analyze modes.")
            return
        if not argument:
            self.write("Usage: /image <path>")
            return

        if view.select_image(argument):
            self.write(f"Loaded {argument} ({view.image.mime_type})")
        else:
            self.write(f"Could not read {argument}.")

    async def _handle_story_command(self, argument: str) -> None:
        if not self.story_view.image.is_ready:
            self.write("Load an image first: /mode story, then /image <path>.")
            return

        self.write("Dreaming...")
        story = await self.story_view.generate()
        if story is not None:
            self.write(story)

    async def _handle_speak_command(self, argument: str) -> None:
        if not self.story_view.story:
            self.write("There is no story to read yet.")
            return

        self.write("Speaking...")
        if not await self.story_view.read_aloud():
            self.write("Could not read the story aloud.")

    async def _handle_prompt_command(self, argument: str) -> None:
        if argument:
            self.analyzer_view.prompt = argument
        self.write(f"Prompt: {self.analyzer_view.prompt}")

    async def _handle_analyze_command(self, argument: str) -> None:
        if argument:
            self.analyzer_view.prompt = argument
        if not self.analyzer_view.image.is_ready:
            self.write("Load an image first: /mode analyze, then /image <path>.")
            return

        analysis = await self.analyzer_view.analyze()
        if analysis is not None:
            self.write(analysis)

    async def _handle_clear_command(self, argument: str) -> None:
        self.chat_view.clear()
        self.write("Chat cleared.")
