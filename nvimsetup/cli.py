"""
nvimsetup - Install Neovim and a configuration bundle on Linux or macOS

Detects the system package manager, installs the dependencies and the editor,
then clones the configuration repository into the Neovim config directory.
"""

from typing import Annotated, Optional

from cyclopts import App, Parameter
from rich.panel import Panel

from nvimsetup import __version__
from nvimsetup.installer import Installer
from nvimsetup.models import InstallerError
from nvimsetup.prompt import CannedPrompt, TerminalPrompt
from nvimsetup.runner import SubprocessRunner
from nvimsetup.settings import load_settings
from nvimsetup.ui import console, print_error

app = App(
    name="nvimsetup",
    help="""
[bold cyan]nvimsetup[/] - Install Neovim and your configuration in one step

Supports [bright_red]apt[/], [blue]dnf[/] and [cyan]pacman[/] on Linux and [bright_yellow]Homebrew[/] on macOS.

[dim]Examples:[/]
  nvimsetup                          Install everything
  nvimsetup --dry-run                Show the commands without running them
  nvimsetup --yes                    Back up an existing config without asking
  nvimsetup --config ~/nvim.yaml     Use another repository or extra packages
""",
    version=__version__,
)


def _build_installer(config: Optional[str], dry_run: bool, yes: bool) -> Installer:
    settings = load_settings(config)
    if settings.source:
        console.print(f"[dim]Settings:[/] {settings.source}")
    return Installer(
        runner=SubprocessRunner(dry_run=dry_run),
        prompt=CannedPrompt(True) if yes else TerminalPrompt(),
        settings=settings,
        dry_run=dry_run,
    )


@app.default
def install(
    *,
    dry_run: Annotated[
        bool,
        Parameter(
            name=["--dry-run", "-n"],
            help="Show what would be done without executing",
        ),
    ] = False,
    yes: Annotated[
        bool,
        Parameter(
            name=["--yes", "-y"],
            help="Back up an existing configuration without asking",
        ),
    ] = False,
    config: Annotated[
        Optional[str],
        Parameter(
            name=["--config", "-c"],
            help="Path to YAML settings file (default: $XDG_CONFIG_HOME/nvimsetup.yaml)",
        ),
    ] = None,
):
    """
    Install dependencies, Neovim and the configuration repository.

    Stops at the first failure. An existing configuration directory is
    renamed to <dir>.bak.<timestamp> after confirmation, never deleted.

    [dim]Examples:[/]
      nvimsetup
      nvimsetup --dry-run
    """
    if dry_run:
        console.print(
            Panel("[yellow]DRY RUN[/] - No changes will be made", style="yellow")
        )

    try:
        installer = _build_installer(config, dry_run, yes)
        installer.run()
    except InstallerError as e:
        print_error(e.message)
        raise SystemExit(e.exit_code)
    except KeyboardInterrupt:
        console.print()
        print_error("Interrupted")
        raise SystemExit(130)


def main():
    """Entry point for the CLI"""
    app()


if __name__ == "__main__":
    main()
