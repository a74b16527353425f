"""Tests for ad-hoc palette commands."""

import logging

from touchgrass.palette.category import RenderInfo
from touchgrass.palette.commands import CommandCategory, PaletteCommand
from touchgrass.palette.controller import NavigationController
from touchgrass.palette.state import PaletteState


def command_titles(controller):
    return [item.render.title for item in controller.items if item.category is controller.commands]


class TestPaletteCommand:
    def test_id_defaults_to_slug(self):
        assert PaletteCommand(name="Delete Tag").id == "delete-tag"

    def test_explicit_id(self):
        assert PaletteCommand(name="Delete Tag", id="custom").id == "custom"


class TestCommandCategory:
    def test_register_and_lookup(self):
        category = CommandCategory()
        command = category.register(PaletteCommand(name="Export Settings"))

        assert category.get("export-settings") is command
        assert category.get_all() == [command]
        assert category.unregister("export-settings") is True
        assert category.unregister("export-settings") is False

    def test_register_replaces_same_id(self):
        category = CommandCategory()
        category.register(PaletteCommand(name="About", description="old"))
        category.register(PaletteCommand(name="About", description="new"))

        assert [c.description for c in category.get_all()] == ["new"]

    def test_filters_by_name_then_description_then_keywords(self):
        category = CommandCategory()
        category.register(PaletteCommand(name="Import Settings", description="load a file"))
        category.register(PaletteCommand(name="Settings file", description="nothing"))
        category.register(PaletteCommand(name="Backup", keywords=["settings"]))
        category.trigger(PaletteState())

        names = [c.name for c in category.list("settings")]
        assert names == ["Import Settings", "Settings file", "Backup"]
        assert [c.name for c in category.list("load")] == ["Import Settings"]

    def test_predicate_decides_alone(self):
        category = CommandCategory()
        category.register(
            PaletteCommand(name="Save To Bookmarks", predicate=lambda query, state: query != "hide")
        )
        category.trigger(PaletteState())

        # The query is a tag name here, not a filter on the command name
        assert [c.name for c in category.list("my new tag")] == ["Save To Bookmarks"]
        assert category.list("hide") == []

    def test_predicate_sees_state(self):
        category = CommandCategory()
        category.register(
            PaletteCommand(name="Only Topics", predicate=lambda q, s: s.active_category == "topics")
        )

        category.trigger(PaletteState(active_category="topics"))
        assert len(category.list("")) == 1

        category.trigger(PaletteState())
        assert category.list("") == []

    def test_text_matches_come_before_predicate_commands(self):
        category = CommandCategory()
        category.register(PaletteCommand(name="Save To Bookmarks", predicate=lambda q, s: True))
        category.register(PaletteCommand(name="Import Settings"))
        category.trigger(PaletteState())

        names = [c.name for c in category.list("Import Settings")]
        assert names == ["Import Settings", "Save To Bookmarks"]

    def test_failing_predicate_hides_command(self, caplog):
        def broken(query, state):
            raise RuntimeError("nope")

        category = CommandCategory()
        category.register(PaletteCommand(name="Fragile", predicate=broken))
        category.register(PaletteCommand(name="Sturdy"))
        category.trigger(PaletteState())

        with caplog.at_level(logging.ERROR):
            assert [c.name for c in category.list("")] == ["Sturdy"]
        assert "fragile" in caplog.text

    def test_default_render(self):
        category = CommandCategory()
        command = PaletteCommand(name="About", description="Version 1")
        info, patch = category.describe(command)

        assert info == RenderInfo(title="About", description="Version 1", detail=False)
        assert patch == {}

    def test_custom_render_uses_state(self):
        def render(cmd, state):
            return RenderInfo(title=f"{cmd.name}: {state.query}", detail=True), {"tag": state.query}

        category = CommandCategory()
        command = PaletteCommand(name="Delete Tag", render=render)
        category.trigger(PaletteState(query="Hope"))

        info, patch = category.describe(command)
        assert info.title == "Delete Tag: Hope"
        assert patch == {"tag": "Hope"}

    def test_render_without_info_falls_back(self):
        category = CommandCategory()
        command = PaletteCommand(name="Go", render=lambda cmd, state: (None, {"query": "x"}))

        info, patch = category.describe(command)
        assert info.title == "Go"
        assert info.detail is True

    def test_invoke_without_action_stays(self):
        category = CommandCategory()
        assert category.invoke(PaletteCommand(name="Info")) == {}

    def test_invoke_passes_current_state(self):
        seen = []
        category = CommandCategory()
        command = PaletteCommand(name="Act", action=lambda state: seen.append(state.query))
        category.trigger(PaletteState(query="now"))

        assert category.invoke(command) is None
        assert seen == ["now"]


class TestControllerCommands:
    def test_add_command_is_listed(self):
        nav = NavigationController()
        nav.add_command("About", "What this is", keywords=["version"])
        nav.open({"query": "version"})

        assert command_titles(nav) == ["About"]

    def test_action_outcome_applies(self):
        nav = NavigationController()
        nav.add_command("Show topics", action=lambda state: {"query": "topics"})
        nav.open()

        nav.activate_selected()

        assert nav.is_open
        assert len(nav.context_stack) == 2
        assert nav.current_state.query == "topics"

    def test_informational_command_keeps_palette_open(self):
        nav = NavigationController()
        nav.add_command("About")
        nav.open()

        nav.activate_selected()

        assert nav.is_open
        assert len(nav.context_stack) == 1
