"""
The installer: detect the platform, install dependencies and the editor,
then deploy the configuration repository.

Every step is fail-fast. Operations raise an InstallerError subclass and the
first one raised ends the run; nothing is retried or rolled back.
"""

import platform
import time
from pathlib import Path
from typing import Callable

from rich.panel import Panel

from nvimsetup.managers import (
    HOMEBREW_URL,
    LINUX_MANAGER_ORDER,
    MANAGERS,
    PackageManager,
    base_packages,
)
from nvimsetup.models import (
    CommandFailed,
    InstallerError,
    OperatorDeclined,
    Settings,
    UnsupportedEnvironment,
)
from nvimsetup.prompt import Prompt
from nvimsetup.runner import ProcessRunner
from nvimsetup.ui import console, print_header, print_success, print_warning

SUPPORTED_SYSTEMS = ("Linux", "Darwin")
UNSUPPORTED = "unsupported"


def backup_path(target_dir: Path, timestamp: float) -> Path:
    """Return <target_dir>.bak.<unix-seconds>"""
    return target_dir.with_name(f"{target_dir.name}.bak.{int(timestamp)}")


def _dedupe(names: list[str]) -> list[str]:
    """Drop repeated names, keeping the first occurrence"""
    seen: set[str] = set()
    unique = []
    for name in names:
        if name not in seen:
            seen.add(name)
            unique.append(name)
    return unique


class Installer:
    """Runs the installation phases against an injected runner and prompt"""

    def __init__(
        self,
        runner: ProcessRunner,
        prompt: Prompt,
        settings: Settings,
        system: Callable[[], str] = platform.system,
        clock: Callable[[], float] = time.time,
        dry_run: bool = False,
    ):
        self.runner = runner
        self.prompt = prompt
        self.settings = settings
        self.system = system
        self.clock = clock
        self.dry_run = dry_run

    # -------------------------------------------------------------------------
    # Detection
    # -------------------------------------------------------------------------

    def detect_os(self) -> str:
        """Return 'Linux' or 'Darwin'; anything else is fatal"""
        os_name = self.system()
        if os_name not in SUPPORTED_SYSTEMS:
            raise UnsupportedEnvironment(
                f"Unsupported operating system: {os_name or 'unknown'} "
                f"(supported: {', '.join(SUPPORTED_SYSTEMS)})"
            )
        return os_name

    def detect_package_manager(self, os_name: str) -> str:
        """Probe for apt-get, dnf and pacman, in that order.

        Returns the manager name, or 'unsupported' when none is present.
        Finding none is only fatal on Linux; macOS uses Homebrew instead.
        """
        for name in LINUX_MANAGER_ORDER:
            if self.runner.is_available(MANAGERS[name].tool):
                return name

        if os_name == "Linux":
            tools = ", ".join(MANAGERS[name].tool for name in LINUX_MANAGER_ORDER)
            raise UnsupportedEnvironment(
                f"No supported package manager found (looked for {tools})"
            )
        return UNSUPPORTED

    def resolve_manager(self, os_name: str, pkg_manager: str) -> PackageManager:
        """Pick the manager that will do the installing.

        On macOS this is always Homebrew, which must already be installed.
        """
        if os_name == "Darwin":
            brew = MANAGERS["brew"](self.runner)
            if not brew.is_available():
                raise UnsupportedEnvironment(
                    f"Homebrew is required on macOS but 'brew' was not found. "
                    f"Install it from {HOMEBREW_URL} and re-run."
                )
            return brew

        if pkg_manager not in MANAGERS:
            raise UnsupportedEnvironment(f"Unsupported package manager: {pkg_manager}")
        return MANAGERS[pkg_manager](self.runner)

    # -------------------------------------------------------------------------
    # Phases
    # -------------------------------------------------------------------------

    def build_dependency_list(self, os_name: str, pkg_manager: str) -> list[str]:
        """Base packages, then the manager's extras, then user extras"""
        manager = self.resolve_manager(os_name, pkg_manager)
        return _dedupe(
            base_packages() + manager.extras() + self.settings.extra_packages
        )

    def install_packages(self, manager: PackageManager, packages: list[str]) -> None:
        """Install all packages in one batch call"""
        print_header("Installing", manager.name, manager.color, packages)
        result = manager.install(packages)
        if not result.success:
            raise CommandFailed(
                result.message or "Dependency installation failed", result
            )
        print_success(f"Installed {len(packages)} packages")

    def ensure_editor_installed(self, manager: PackageManager) -> None:
        editor = self.settings.editor
        if self.runner.is_available(editor):
            print_success(f"{editor} is already installed")
            return

        print_header("Installing", "editor", manager.color, [editor])
        result = manager.install_editor()
        if not result.success:
            raise CommandFailed(result.message or "Editor installation failed", result)
        print_success(f"{editor} installed")

    def _backup(self, target_dir: Path) -> Path:
        backup = backup_path(target_dir, self.clock())
        if backup.exists():
            raise InstallerError(f"Backup path already exists: {backup}")

        if self.dry_run:
            console.print(f"  [dim]Would move:[/] {target_dir} -> {backup}")
            return backup

        try:
            target_dir.rename(backup)
        except OSError as e:
            raise InstallerError(f"Could not back up {target_dir}: {e}")
        return backup

    def deploy_configuration(self, target_dir: Path) -> None:
        """Clone the configuration repo, backing up an existing directory first"""
        print_header("Deploying", "configuration", items=[str(target_dir)])

        if target_dir.exists() or target_dir.is_symlink():
            print_warning(f"Existing configuration found at {target_dir}")
            if not self.prompt.confirm("Back it up and continue?"):
                raise OperatorDeclined(
                    f"Left {target_dir} untouched; move it away or re-run and confirm"
                )
            backup = self._backup(target_dir)
            print_success(f"Backed up to {backup}")

        cmd = ["git", "clone"]
        if self.settings.branch:
            cmd += ["--branch", self.settings.branch]
        cmd += [self.settings.repo_url, str(target_dir)]

        result = self.runner.run(cmd)
        if not result.success:
            raise CommandFailed(result.message or "Clone failed", result)
        print_success(f"Cloned {self.settings.repo_url}")

    def print_font_instructions(self) -> None:
        console.print(
            Panel(
                "Icons in the configuration need a [bold]Nerd Font[/].\n\n"
                "  1. Download one from [cyan]https://www.nerdfonts.com/font-downloads[/]\n"
                "     (for example JetBrainsMono Nerd Font)\n"
                "  2. Install it with your system font manager\n"
                "  3. Select it as the font in your terminal emulator",
                title="Fonts",
                style="cyan",
            )
        )

    # -------------------------------------------------------------------------
    # Orchestration
    # -------------------------------------------------------------------------

    def run(self) -> None:
        """Run every phase in order, stopping at the first error"""
        os_name = self.detect_os()
        console.print(f"[dim]Platform:[/] {os_name}")

        pkg_manager = self.detect_package_manager(os_name)
        manager = self.resolve_manager(os_name, pkg_manager)
        console.print(f"[dim]Package manager:[/] {manager.name}")

        packages = self.build_dependency_list(os_name, pkg_manager)
        self.install_packages(manager, packages)
        self.ensure_editor_installed(manager)
        self.deploy_configuration(self.settings.config_dir)

        console.print()
        console.print(Panel("[green]Neovim is installed and configured![/]", style="green"))
        self.print_font_instructions()

