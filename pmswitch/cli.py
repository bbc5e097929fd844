"""
pmswitch.cli — Typer-based CLI entry-point.

This is what runs when a user types ``pmswitch`` in their terminal.
Sub-commands:

    pmswitch setup                        → first-run interactive wizard
    pmswitch watch --to pnpm              → rewrite copied commands until Ctrl+C
    pmswitch translate "npm i react"      → one-shot translation
    pmswitch console                      → interactive control console
    pmswitch info                         → print current config summary
"""

from __future__ import annotations

import time
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from pmswitch import __version__
from pmswitch.clipboard import BACKENDS, ClipboardUnavailableError, get_backend
from pmswitch.config import LoggingSettings, PmSwitchSettings, config_path, get_settings, needs_setup
from pmswitch.context import AppContext
from pmswitch.log import configure_logging
from pmswitch.translator import PackageManager
from pmswitch.translator import translate as translate_command

# ---------------------------------------------------------------------------
# Typer app
# ---------------------------------------------------------------------------

app = typer.Typer(
    name="pmswitch",
    help="pmswitch — rewrite copied npm / pnpm / yarn / bun commands for your package manager.",
    no_args_is_help=True,
    add_completion=True,
)
console = Console()


def _load_settings() -> PmSwitchSettings:
    """Return settings, turning a broken config file into a clean exit."""
    try:
        return get_settings()
    except ValidationError as exc:
        console.print(f"[red]✗ Invalid configuration in {config_path()}:[/red]\n{escape(str(exc))}")
        raise typer.Exit(code=1)


def _option_manager(value: str) -> str:
    """Normalize a typed --to value (" PNPM" -> "pnpm"); unknown names pass through."""
    pm = PackageManager.parse(value, strict=False)
    return pm.value if pm is not None else value


def _warn_unknown_manager(name: str) -> None:
    if PackageManager.parse(name) is None:
        console.print(
            f"[yellow]⚠  '{escape(name)}' is not one of npm, pnpm, yarn, bun; "
            "nothing will be translated.[/yellow]"
        )


# ---------------------------------------------------------------------------
# Callbacks (version flag, logging)
# ---------------------------------------------------------------------------

def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold cyan]pmswitch[/bold cyan] v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Optional[bool] = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Log debug output to stderr."),
) -> None:
    """pmswitch — keep copied install commands in your package manager's dialect."""
    if ctx.invoked_subcommand == "setup":
        # The wizard replaces the config file, so it must run even when that file is broken
        log_settings = LoggingSettings()
    else:
        log_settings = _load_settings().logging
    configure_logging("DEBUG" if verbose else log_settings.level, log_settings.file)


# ---------------------------------------------------------------------------
# pmswitch setup  (first-run wizard)
# ---------------------------------------------------------------------------

@app.command()
def setup(
    reset: bool = typer.Option(False, "--reset", help="Reconfigure from scratch."),
) -> None:
    """Run the first-time setup wizard (preferred manager, polling interval)."""
    from pmswitch.setup import run_setup

    run_setup(reset=reset)
    get_settings.cache_clear()


# ---------------------------------------------------------------------------
# pmswitch info
# ---------------------------------------------------------------------------

@app.command()
def info() -> None:
    """Print the current configuration summary."""
    from pmswitch.system.detect import get_installed_managers

    settings = _load_settings()
    installed = get_installed_managers()

    found = ", ".join(f"{pm.value} {v}" for pm, v in installed.versions.items())

    body = Text.assemble(
        ("Preferred: ", "bold"),
        (settings.preferred_manager, "green"),
        "\n",
        ("Backend:   ", "bold"),
        (settings.monitor.backend, "cyan"),
        "\n",
        ("Interval:  ", "bold"),
        (f"{settings.monitor.poll_interval}s", "cyan"),
        "\n",
        ("Config:    ", "bold"),
        (str(config_path()) if not needs_setup() else "(defaults, run pmswitch setup)", "dim"),
        "\n",
        ("Installed: ", "bold"),
        (found or "(none found)", "magenta"),
        "\n",
    )

    console.print(
        Panel(body, title=f"[bold]pmswitch v{__version__}[/bold]", border_style="bright_blue")
    )


# ---------------------------------------------------------------------------
# pmswitch translate  (one-shot)
# ---------------------------------------------------------------------------

@app.command(name="translate")
def translate_cmd(
    command: str = typer.Argument(..., help="The command to translate, e.g. \"npm install react\"."),
    to: Optional[str] = typer.Option(  # noqa: UP007
        None, "--to", "-t", help="Target package manager (default: configured preference)."
    ),
) -> None:
    """Translate a single command and print the result."""
    target = _option_manager(to) if to else _load_settings().preferred_manager
    _warn_unknown_manager(target)

    result = translate_command(command, target)
    if result is None:
        console.print(f"[dim]No rewrite for {escape(target)}.[/dim]")
        raise typer.Exit(code=1)
    console.print(result, markup=False, highlight=False)


# ---------------------------------------------------------------------------
# pmswitch watch  (background monitoring in the foreground)
# ---------------------------------------------------------------------------

@app.command()
def watch(
    to: Optional[str] = typer.Option(None, "--to", "-t", help="Target package manager."),  # noqa: UP007
    backend: Optional[str] = typer.Option(  # noqa: UP007
        None, "--backend", "-b", help=f"Clipboard backend ({', '.join(BACKENDS)})."
    ),
    interval: Optional[float] = typer.Option(  # noqa: UP007
        None, "--interval", "-i", min=0.01, help="Seconds between clipboard checks."
    ),
    duration: float = typer.Option(
        0.0, "--duration", min=0.0, help="Stop after this many seconds (0 = until Ctrl+C)."
    ),
) -> None:
    """Watch the clipboard and rewrite package-manager commands as they are copied."""
    from pmswitch.shell import print_event

    settings = _load_settings()
    backend_name = backend or settings.monitor.backend
    if backend_name not in BACKENDS:
        raise typer.BadParameter(
            f"must be one of {', '.join(BACKENDS)}", param_hint="'--backend'"
        )

    ctx = AppContext(
        backend_factory=lambda: get_backend(backend_name),
        interval=interval or settings.monitor.poll_interval,
        default_manager=_option_manager(to) if to else settings.preferred_manager,
    )
    ctx.initialize()
    _warn_unknown_manager(ctx.get_preferred_manager())
    if settings.monitor.notify:
        ctx.subscribe(print_event)

    try:
        ctx.toggle_monitoring(True)
    except ClipboardUnavailableError as exc:
        console.print(f"[red]✗ {escape(str(exc))}[/red]")
        console.print("[dim]On Linux install xclip, xsel or wl-clipboard.[/dim]")
        raise typer.Exit(code=1)

    console.print(
        f"[bold green]●[/bold green] Watching clipboard, translating to "
        f"[bold cyan]{escape(ctx.get_preferred_manager())}[/bold cyan]. "
        "[dim]Ctrl+C to stop.[/dim]"
    )

    deadline = time.monotonic() + duration if duration > 0 else None
    try:
        while deadline is None or time.monotonic() < deadline:
            time.sleep(0.1 if deadline is not None else 0.5)
    except KeyboardInterrupt:
        pass
    finally:
        ctx.shutdown()
    console.print("[dim]Stopped.[/dim]")


# ---------------------------------------------------------------------------
# pmswitch console  (interactive, delegates to shell.py)
# ---------------------------------------------------------------------------

@app.command(name="console")
def console_cmd() -> None:
    """Start the interactive control console."""
    from pmswitch.shell import start_repl   # lazy import to keep startup fast

    ctx = AppContext.from_settings(_load_settings())
    ctx.initialize()
    start_repl(ctx)


# ---------------------------------------------------------------------------
# Entry-point (for `python -m pmswitch.cli`)
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    app()
