"""
pmswitch.shell — Interactive control console powered by prompt_toolkit + rich.

Launched by ``pmswitch console``.  The terminal stand-in for a tray menu:
switch the preferred manager, start/stop clipboard monitoring, and try
translations by hand while rewrites from the watcher scroll past.
"""

from __future__ import annotations

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.formatted_text import HTML
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.patch_stdout import patch_stdout
from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel

from pmswitch import __version__
from pmswitch.clipboard import ClipboardUnavailableError
from pmswitch.context import AppContext
from pmswitch.translator import PackageManager, TranslationEvent, translate

console = Console()

# Lines starting with one of these are translated without the "translate" keyword
_COMMAND_STARTS = ("npm ", "pnpm ", "yarn ", "bun ", "npx ", "pnpx ", "bunx ")

_HELP_TEXT = """\
**Available commands**

| Command | Description |
|---------|-------------|
| `use <manager>` | Set the preferred package manager (npm, pnpm, yarn, bun) |
| `start` / `stop` | Turn clipboard monitoring on or off |
| `status` | Show the preference and monitoring state |
| `translate <command>` | Translate a command without touching the clipboard |
| `npm install react` | Any package-manager command is translated directly |
| `help` | Show this help |
| `exit` / `quit` | Leave the console |
"""


def _build_completer() -> WordCompleter:
    words = ["use", "start", "stop", "status", "translate", "help", "exit", "quit"]
    words += [pm.value for pm in PackageManager]
    return WordCompleter(words, ignore_case=True)


def print_event(event: TranslationEvent) -> None:
    """Render a clipboard rewrite."""
    console.print(
        f"[dim]📋[/dim] [red]{escape(event.original)}[/red] [dim]→[/dim] [green]{escape(event.translated)}[/green]",
        highlight=False,
    )


def _print_status(ctx: AppContext) -> None:
    state = "[green]monitoring[/green]" if ctx.get_monitoring_state() else "[red]stopped[/red]"
    console.print(f"Preferred: [bold cyan]{escape(ctx.get_preferred_manager())}[/bold cyan]  Clipboard: {state}")


def _translate_line(ctx: AppContext, command: str) -> None:
    result = translate(command, ctx.get_preferred_manager())
    if result is None:
        console.print("[dim]No rewrite.[/dim]")
    else:
        console.print(result, markup=False, highlight=False)


def dispatch(ctx: AppContext, line: str) -> bool:
    """Handle one console line.  Returns False when the user wants to leave."""
    line = line.strip()
    if not line:
        return True

    word, _, rest = line.partition(" ")
    word = word.lower()
    rest = rest.strip()

    if word in ("exit", "quit"):
        return False

    if word == "help":
        console.print(Markdown(_HELP_TEXT))
    elif word == "status":
        _print_status(ctx)
    elif word == "use":
        if not rest:
            console.print("[yellow]Usage: use <npm|pnpm|yarn|bun>[/yellow]")
        else:
            ctx.set_preferred_manager(rest)
            if PackageManager.parse(rest) is None:
                console.print(f"[yellow]⚠  '{escape(rest)}' is not a known package manager; nothing will be translated.[/yellow]")
            _print_status(ctx)
    elif word == "start":
        try:
            ctx.toggle_monitoring(True)
        except ClipboardUnavailableError as exc:
            console.print(f"[red]✗ {escape(str(exc))}[/red]")
        else:
            _print_status(ctx)
    elif word == "stop":
        ctx.toggle_monitoring(False)
        _print_status(ctx)
    elif word == "translate":
        if rest:
            _translate_line(ctx, rest)
        else:
            console.print("[yellow]Usage: translate <command>[/yellow]")
    elif line.startswith(_COMMAND_STARTS):
        _translate_line(ctx, line)
    else:
        console.print(f"[yellow]Unknown command: {escape(word)}. Type [bold]help[/bold].[/yellow]")
    return True


def start_repl(ctx: AppContext) -> None:
    """Run the interactive console until ``exit`` or Ctrl+D.

    Parameters
    ----------
    ctx:
        An initialized application context.  Monitoring is stopped on exit.
    """
    console.print(
        Panel(
            f"[bold]Preferred:[/bold] {ctx.get_preferred_manager()}\n"
            f"[dim]Type [bold]help[/bold] for commands, [bold]exit[/bold] to quit.[/dim]",
            title=f"[bold bright_blue]pmswitch v{__version__}[/bold bright_blue]",
            border_style="bright_blue",
        )
    )

    session: PromptSession[str] = PromptSession(
        history=InMemoryHistory(),
        completer=_build_completer(),
    )
    unsubscribe = ctx.subscribe(print_event)

    try:
        while True:
            try:
                # patch_stdout keeps watcher output from garbling the prompt
                with patch_stdout():
                    line = session.prompt(HTML("<b><ansicyan>pmswitch ▸ </ansicyan></b>"))
            except (EOFError, KeyboardInterrupt):
                break
            if not dispatch(ctx, line):
                break
    finally:
        unsubscribe()
        ctx.shutdown()
        console.print("[dim]Goodbye.[/dim]")
