import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from lumina.entities.image import ImageState
from lumina.entities.message import ChatMessage
from lumina.services.ConsoleService.console_service import (
    HELP_MESSAGE,
    UNEXPECTED_ERROR_MESSAGE,
    ConsoleService,
)

READY_IMAGE = ImageState(
    raw_bytes=b"foobar", base64="Zm9vYmFy", mime_type="image/png"
)


@pytest.fixture
def story_view() -> MagicMock:
    view = MagicMock()
    view.image = ImageState.empty()
    view.story = ""
    view.generate = AsyncMock()
    view.read_aloud = AsyncMock()
    return view


@pytest.fixture
def analyzer_view() -> MagicMock:
    view = MagicMock()
    view.image = ImageState.empty()
    view.prompt = "Describe this image in detail."
    view.analyze = AsyncMock()
    return view


@pytest.fixture
def chat_view() -> MagicMock:
    view = MagicMock()
    view.send = AsyncMock()
    return view


@pytest.fixture
def output() -> list[str]:
    return []


@pytest.fixture
def console(story_view, analyzer_view, chat_view, output) -> ConsoleService:
    return ConsoleService(
        story_view=story_view,
        analyzer_view=analyzer_view,
        chat_view=chat_view,
        logger=logging.getLogger("ConsoleServiceTest"),
        read_line=AsyncMock(return_value=None),
        write=output.append,
    )


class TestCommands:
    """Test cases for command routing."""

    @pytest.mark.asyncio
    async def test_exit_and_quit_end_session(self, console: ConsoleService) -> None:
        assert await console.handle_line("/exit") is False
        assert await console.handle_line("/QUIT") is False

    @pytest.mark.asyncio
    async def test_empty_line_is_ignored(
        self, console: ConsoleService, output: list[str]
    ) -> None:
        assert await console.handle_line("   ") is True
        assert output == []

    @pytest.mark.asyncio
    async def test_help(self, console: ConsoleService, output: list[str]) -> None:
        await console.handle_line("/help")

        assert output == [HELP_MESSAGE]

    @pytest.mark.asyncio
    async def test_unknown_command(
        self, console: ConsoleService, output: list[str]
    ) -> None:
        await console.handle_line("/dance")

        assert "Unknown command /dance" in output[0]

    @pytest.mark.asyncio
    async def test_mode_switch(self, console: ConsoleService, output: list[str]) -> None:
        await console.handle_line("/mode Chat")
        assert console.mode == "chat"

        await console.handle_line("/mode poetry")
        assert console.mode == "chat"
        assert "Available" in output[-1]

    @pytest.mark.asyncio
    async def test_leaving_a_mode_discards_its_state(
        self, console: ConsoleService, story_view, analyzer_view, chat_view
    ) -> None:
        await console.handle_line("/mode analyze")
        story_view.reset.assert_called_once()

        await console.handle_line("/mode chat")
        analyzer_view.reset.assert_called_once()
        chat_view.clear.assert_not_called()

        await console.handle_line("/mode story")
        chat_view.clear.assert_called_once()

    @pytest.mark.asyncio
    async def test_reselecting_current_mode_keeps_state(
        self, console: ConsoleService, story_view
    ) -> None:
        await console.handle_line("/mode story")

        story_view.reset.assert_not_called()

    @pytest.mark.asyncio
    async def test_image_loads_into_active_view(
        self, console: ConsoleService, story_view, analyzer_view
    ) -> None:
        story_view.select_image.return_value = True
        await console.handle_line("/image ./photo.png")
        story_view.select_image.assert_called_once_with("./photo.png")

        await console.handle_line("/mode analyze")
        analyzer_view.select_image.return_value = False
        await console.handle_line("/image ./cat.jpg")
        analyzer_view.select_image.assert_called_once_with("./cat.jpg")

    @pytest.mark.asyncio
    async def test_image_in_chat_mode_is_refused(
        self, console: ConsoleService, story_view, output: list[str]
    ) -> None:
        console.mode = "chat"

        await console.handle_line("/image ./photo.png")

        story_view.select_image.assert_not_called()
        assert "story and analyze" in output[0]

    @pytest.mark.asyncio
    async def test_story_requires_image(
        self, console: ConsoleService, story_view, output: list[str]
    ) -> None:
        await console.handle_line("/story")

        story_view.generate.assert_not_awaited()
        assert "Load an image first" in output[0]

    @pytest.mark.asyncio
    async def test_story_prints_generated_text(
        self, console: ConsoleService, story_view, output: list[str]
    ) -> None:
        story_view.image = READY_IMAGE
        story_view.generate.return_value = "The rain spoke first."

        await console.handle_line("/story")

        assert output[-1] == "The rain spoke first."

    @pytest.mark.asyncio
    async def test_speak_reports_failure(
        self, console: ConsoleService, story_view, output: list[str]
    ) -> None:
        story_view.story = "The rain spoke first."
        story_view.read_aloud.return_value = False

        await console.handle_line("/speak")

        story_view.read_aloud.assert_awaited_once()
        assert output[-1] == "Could not read the story aloud."

    @pytest.mark.asyncio
    async def test_analyze_with_inline_prompt(
        self, console: ConsoleService, analyzer_view, output: list[str]
    ) -> None:
        analyzer_view.image = READY_IMAGE
        analyzer_view.analyze.return_value = "Two cats."

        await console.handle_line("/analyze How many cats?")

        assert analyzer_view.prompt == "How many cats?"
        assert output[-1] == "Two cats."

    @pytest.mark.asyncio
    async def test_prompt_command_sets_prompt(
        self, console: ConsoleService, analyzer_view
    ) -> None:
        await console.handle_line("/prompt What colour is the sky?")

        assert analyzer_view.prompt == "What colour is the sky?"

    @pytest.mark.asyncio
    async def test_clear(self, console: ConsoleService, chat_view) -> None:
        await console.handle_line("/clear")

        chat_view.clear.assert_called_once()


class TestChatText:
    """Test cases for free text."""

    @pytest.mark.asyncio
    async def test_text_in_chat_mode_is_sent(
        self, console: ConsoleService, chat_view, output: list[str]
    ) -> None:
        console.mode = "chat"
        chat_view.send.return_value = ChatMessage(role="model", text="Hi!", timestamp=1)

        await console.handle_line("Hello")

        chat_view.send.assert_awaited_once_with("Hello")
        assert output == ["Hi!"]

    @pytest.mark.asyncio
    async def test_text_outside_chat_mode_is_not_sent(
        self, console: ConsoleService, chat_view, output: list[str]
    ) -> None:
        await console.handle_line("Hello")

        chat_view.send.assert_not_awaited()
        assert "/mode chat" in output[0]


@pytest.mark.asyncio
async def test_start_runs_until_input_ends(
    story_view, analyzer_view, chat_view, output: list[str]
) -> None:
    read_line = AsyncMock(side_effect=["/mode chat", "Hello", None])
    chat_view.send.return_value = ChatMessage(role="model", text="Hi!", timestamp=1)
    console = ConsoleService(
        story_view=story_view,
        analyzer_view=analyzer_view,
        chat_view=chat_view,
        logger=logging.getLogger("ConsoleServiceTest"),
        read_line=read_line,
        write=output.append,
    )

    await console.start()

    assert read_line.await_count == 3
    assert output[0] == HELP_MESSAGE
    assert output[-1] == "Hi!"


@pytest.mark.asyncio
async def test_start_survives_unexpected_handler_error(
    story_view, analyzer_view, chat_view, output: list[str]
) -> None:
    read_line = AsyncMock(side_effect=["/image ./huge.png", "/help", None])
    story_view.select_image.side_effect = RuntimeError("decoder exploded")
    console = ConsoleService(
        story_view=story_view,
        analyzer_view=analyzer_view,
        chat_view=chat_view,
        logger=logging.getLogger("ConsoleServiceTest"),
        read_line=read_line,
        write=output.append,
    )

    await console.start()

    assert read_line.await_count == 3
    assert output == [HELP_MESSAGE, UNEXPECTED_ERROR_MESSAGE, HELP_MESSAGE]
