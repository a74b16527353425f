"""Tests for the palette prompt and confirm helpers."""

import asyncio

import pytest

from touchgrass.palette.controller import NavigationController
from touchgrass.palette.prompt import PromptCategory, PromptChoice


def titles(controller):
    return [item.render.title for item in controller.items]


@pytest.fixture
def controller():
    nav = NavigationController()
    nav.add_command("Unrelated command")
    return nav


class TestPrompt:
    @pytest.mark.asyncio
    async def test_opens_with_text_as_query(self, controller):
        future = controller.prompt("Name your tag")

        assert controller.is_open
        assert controller.current_state.query == "Name your tag"
        # Only the prompt's own rows are shown
        assert titles(controller) == ["Confirm", "Cancel"]
        assert controller.sections[0].title == "Name your tag"
        assert not future.done()

    @pytest.mark.asyncio
    async def test_confirm_without_editing_resolves_to_text(self, controller):
        future = controller.prompt("Hi")
        controller.activate_selected()

        assert await future == "Hi"
        assert not controller.is_open

    @pytest.mark.asyncio
    async def test_confirm_resolves_to_edited_query(self, controller):
        future = controller.prompt("Name your tag")
        controller.update_query("Psalms I love")

        assert controller.items[0].render.description == "Psalms I love"
        controller.activate_selected()

        assert await future == "Psalms I love"
        assert not controller.is_open

    @pytest.mark.asyncio
    async def test_cancel_resolves_to_none(self, controller):
        future = controller.prompt("Delete everything?")
        controller.move_selection(1)
        controller.activate_selected()

        assert await future is None

    @pytest.mark.asyncio
    async def test_close_resolves_to_none(self, controller):
        future = controller.prompt("Question")
        controller.close()

        assert await future is None

    @pytest.mark.asyncio
    async def test_reopen_abandons_prompt(self, controller):
        future = controller.prompt("Question")
        controller.open()

        assert await future is None
        assert "Unrelated command" in titles(controller)

    @pytest.mark.asyncio
    async def test_prompt_category_is_removed(self, controller):
        future = controller.prompt("Question")
        key = controller.current_state.active_category
        assert isinstance(controller.get_category(key), PromptCategory)

        controller.activate_selected()
        await future
        await asyncio.sleep(0)

        assert controller.get_category(key) is None
        assert all(not isinstance(c, PromptCategory) for c in controller.categories)

    @pytest.mark.asyncio
    async def test_each_prompt_gets_own_key(self, controller):
        controller.prompt("First")
        first = controller.current_state.active_category
        controller.prompt("Second")
        second = controller.current_state.active_category

        assert first != second

    @pytest.mark.asyncio
    async def test_confirm_helper(self, controller):
        task = asyncio.create_task(controller.confirm("Are you sure?"))
        await asyncio.sleep(0)

        assert controller.is_open
        controller.activate_selected()

        assert await task is True

    @pytest.mark.asyncio
    async def test_confirm_helper_cancelled(self, controller):
        task = asyncio.create_task(controller.confirm("Are you sure?"))
        await asyncio.sleep(0)

        controller.close()

        assert await task is False


class TestPromptCategory:
    @pytest.mark.asyncio
    async def test_resolves_once(self):
        future = asyncio.get_running_loop().create_future()
        category = PromptCategory("Question", future, key="prompt-x")

        assert category.resolve("first") is True
        assert category.resolve("second") is False
        assert future.result() == "first"

    @pytest.mark.asyncio
    async def test_invoke_closes(self):
        future = asyncio.get_running_loop().create_future()
        category = PromptCategory("Question", future, key="prompt-x")

        assert category.invoke(PromptChoice.CANCEL) is None
        assert future.result() is None
