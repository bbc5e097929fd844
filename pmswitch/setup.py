"""
pmswitch.setup — First-run interactive setup wizard.

Creates ``~/.pmswitch/config.yaml`` so the preferred package manager
survives restarts (``pip install pmswitch && pmswitch setup``).
"""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.prompt import FloatPrompt, Prompt

from pmswitch.config import PmSwitchSettings, save_settings
from pmswitch.system.detect import get_installed_managers
from pmswitch.translator.base import PackageManager

console = Console()

# Canonical user-level config directory
PMSWITCH_HOME = Path.home() / ".pmswitch"
USER_CONFIG_PATH = PMSWITCH_HOME / "config.yaml"


def _default_config() -> dict:
    """Return the default config dictionary."""
    return {
        "version": 1,
        "preferred_manager": "npm",
        "monitor": {
            "poll_interval": 0.5,
            "backend": "system",
            "notify": True,
        },
        "logging": {
            "level": "WARNING",
            "file": None,
        },
    }


def is_configured() -> bool:
    """Return True if ``~/.pmswitch/config.yaml`` exists."""
    return USER_CONFIG_PATH.exists()


def write_config(config: dict, path: Path | None = None) -> Path:
    """Validate *config* and write it as YAML (default: the user-level config)."""
    return save_settings(PmSwitchSettings(**config), path or USER_CONFIG_PATH)


def run_setup(reset: bool = False) -> None:
    """Interactive first-run wizard.

    Parameters
    ----------
    reset : bool
        If True, overwrite existing config.
    """
    if is_configured() and not reset:
        console.print("[green]✓[/green] pmswitch is already configured.")
        console.print(f"  Config: [dim]{USER_CONFIG_PATH}[/dim]")
        console.print("  Run [bold]pmswitch setup --reset[/bold] to reconfigure.")
        return

    console.print()
    console.print(
        Panel(
            "[bold]Welcome to pmswitch![/bold]\n\n"
            "Pick the package manager you actually use. Commands you copy\n"
            "for any other manager get rewritten on the clipboard.",
            title="📦 First-Time Setup",
            border_style="bright_blue",
            padding=(1, 2),
        )
    )
    console.print()

    # --- Step 1: preferred manager ---
    installed = get_installed_managers()
    console.print("[bold]1/2[/bold] [cyan]Preferred package manager[/cyan]")
    if installed.versions:
        found = ", ".join(f"{pm.value} {v}" for pm, v in installed.versions.items())
        console.print(f"  Detected: [dim]{found}[/dim]")
    manager = Prompt.ask(
        "  Translate commands to",
        choices=[pm.value for pm in PackageManager],
        default=installed.suggested_default().value,
    )

    # --- Step 2: polling interval ---
    console.print()
    console.print("[bold]2/2[/bold] [cyan]Clipboard polling[/cyan]")
    interval = FloatPrompt.ask("  Seconds between clipboard checks", default=0.5)
    if interval <= 0:
        console.print("  [yellow]Interval must be positive, using 0.5[/yellow]")
        interval = 0.5

    # --- Save config ---
    config = _default_config()
    config["preferred_manager"] = manager
    config["monitor"]["poll_interval"] = interval
    path = write_config(config)

    console.print()
    console.print(
        Panel(
            f"[green]✓[/green] Config saved to [bold]{path}[/bold]\n\n"
            "Try it now:\n"
            "  [bold cyan]pmswitch watch[/bold cyan]",
            title="✅ Setup Complete",
            border_style="green",
            padding=(1, 2),
        )
    )
