"""Tests for pmswitch.shell — console command dispatch."""

from __future__ import annotations

import pytest

from pmswitch.clipboard import ClipboardUnavailableError, MemoryClipboard
from pmswitch.context import AppContext
from pmswitch.shell import dispatch, print_event
from pmswitch.translator import TranslationEvent


@pytest.fixture
def ctx():
    context = AppContext(backend_factory=MemoryClipboard, interval=0.01)
    context.initialize()
    yield context
    context.shutdown()


class TestDispatch:
    def test_exit_and_quit(self, ctx: AppContext) -> None:
        assert dispatch(ctx, "exit") is False
        assert dispatch(ctx, "QUIT") is False

    def test_blank_line(self, ctx: AppContext) -> None:
        assert dispatch(ctx, "   ") is True

    def test_help(self, ctx: AppContext, capsys: pytest.CaptureFixture[str]) -> None:
        assert dispatch(ctx, "help") is True
        assert "use <manager>" in capsys.readouterr().out

    def test_use_sets_preference(self, ctx: AppContext, capsys: pytest.CaptureFixture[str]) -> None:
        dispatch(ctx, "use pnpm")
        assert ctx.get_preferred_manager() == "pnpm"
        assert "pnpm" in capsys.readouterr().out

    def test_use_unknown_warns(self, ctx: AppContext, capsys: pytest.CaptureFixture[str]) -> None:
        dispatch(ctx, "use deno")
        assert ctx.get_preferred_manager() == "deno"
        assert "not a known package manager" in capsys.readouterr().out

    def test_use_without_name(self, ctx: AppContext, capsys: pytest.CaptureFixture[str]) -> None:
        dispatch(ctx, "use")
        assert ctx.get_preferred_manager() == "npm"
        assert "Usage" in capsys.readouterr().out

    def test_start_and_stop(self, ctx: AppContext, capsys: pytest.CaptureFixture[str]) -> None:
        dispatch(ctx, "start")
        assert ctx.get_monitoring_state() is True
        assert "monitoring" in capsys.readouterr().out
        dispatch(ctx, "stop")
        assert ctx.get_monitoring_state() is False
        assert "stopped" in capsys.readouterr().out

    def test_start_with_unavailable_clipboard(self, capsys: pytest.CaptureFixture[str]) -> None:
        def unavailable():
            raise ClipboardUnavailableError("no clipboard")

        context = AppContext(backend_factory=unavailable)
        context.initialize()
        assert dispatch(context, "start") is True
        assert context.get_monitoring_state() is False
        assert "no clipboard" in capsys.readouterr().out

    def test_translate_keyword(self, ctx: AppContext, capsys: pytest.CaptureFixture[str]) -> None:
        ctx.set_preferred_manager("yarn")
        dispatch(ctx, "translate npm uninstall lodash")
        assert "yarn remove lodash" in capsys.readouterr().out

    def test_direct_command(self, ctx: AppContext, capsys: pytest.CaptureFixture[str]) -> None:
        ctx.set_preferred_manager("bun")
        dispatch(ctx, "npx cowsay hi")
        assert "bunx cowsay hi" in capsys.readouterr().out

    def test_direct_command_without_rewrite(self, ctx: AppContext, capsys: pytest.CaptureFixture[str]) -> None:
        dispatch(ctx, "npm install react")
        assert "No rewrite" in capsys.readouterr().out

    def test_unknown_command(self, ctx: AppContext, capsys: pytest.CaptureFixture[str]) -> None:
        assert dispatch(ctx, "frobnicate") is True
        assert "Unknown command" in capsys.readouterr().out


class TestPrintEvent:
    def test_markup_in_clipboard_text_is_not_interpreted(self, capsys: pytest.CaptureFixture[str]) -> None:
        print_event(TranslationEvent("npm i [bold]x", "pnpm add [bold]x"))
        out = capsys.readouterr().out
        assert "npm i [bold]x" in out
        assert "pnpm add [bold]x" in out
