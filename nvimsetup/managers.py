from abc import ABC, abstractmethod
from importlib import resources

import yaml

from nvimsetup.models import CommandResult
from nvimsetup.runner import ProcessRunner

EDITOR_PACKAGE = "neovim"


def load_package_sets() -> dict:
    """Load base and per-manager package names from the bundled packages.yaml"""
    data_file = resources.files("nvimsetup").joinpath("packages.yaml")
    with resources.as_file(data_file) as path:
        with open(path) as f:
            return yaml.safe_load(f) or {}


def base_packages() -> list[str]:
    return list(load_package_sets().get("base", []))


# =============================================================================
# Package Manager Abstraction
# =============================================================================


class PackageManager(ABC):
    """Abstract base class for system package managers"""

    name: str
    color: str
    tool: str
    # Linux managers write to the system package database
    privileged: bool = True

    def __init__(self, runner: ProcessRunner):
        self.runner = runner

    @abstractmethod
    def install(self, packages: list[str]) -> CommandResult:
        """Install packages non-interactively in a single call"""
        pass

    def install_editor(self) -> CommandResult:
        """Install the editor package"""
        return self.install([EDITOR_PACKAGE])

    def is_available(self) -> bool:
        """Check if the package manager tool is available"""
        return self.runner.is_available(self.tool)

    def extras(self) -> list[str]:
        """Finder and clipboard packages under this manager's names"""
        return list(load_package_sets().get("extras", {}).get(self.name, []))

    def _run_command(self, cmd: list[str]) -> CommandResult:
        return self.runner.run(cmd, privileged=self.privileged)

    def _run_all(self, cmds: list[list[str]]) -> CommandResult:
        """Run commands in order, stopping at the first failure"""
        for cmd in cmds:
            result = self._run_command(cmd)
            if not result.success:
                return result
        return CommandResult(success=True)


class AptManager(PackageManager):
    """APT (Debian, Ubuntu and derivatives)"""

    name = "apt"
    color = "bright_red"
    tool = "apt-get"
    editor_ppa = "ppa:neovim-ppa/unstable"

    def install(self, packages: list[str]) -> CommandResult:
        return self._run_all(
            [
                ["apt-get", "update"],
                ["apt-get", "install", "-y", *packages],
            ]
        )

    def install_editor(self) -> CommandResult:
        """Install Neovim from the unstable PPA; the archive version is too old"""
        return self._run_all(
            [
                ["add-apt-repository", "-y", self.editor_ppa],
                ["apt-get", "update"],
                ["apt-get", "install", "-y", EDITOR_PACKAGE],
            ]
        )


class DnfManager(PackageManager):
    """DNF (Fedora, RHEL and derivatives)"""

    name = "dnf"
    color = "blue"
    tool = "dnf"

    def install(self, packages: list[str]) -> CommandResult:
        return self._run_command(["dnf", "install", "-y", *packages])


class PacmanManager(PackageManager):
    """Pacman (Arch Linux and derivatives)"""

    name = "pacman"
    color = "cyan"
    tool = "pacman"

    def install(self, packages: list[str]) -> CommandResult:
        return self._run_command(["pacman", "-S", "--noconfirm", "--needed", *packages])


class BrewManager(PackageManager):
    """Homebrew (macOS)"""

    name = "brew"
    color = "bright_yellow"
    tool = "brew"
    # Homebrew refuses to run as root
    privileged = False

    def install(self, packages: list[str]) -> CommandResult:
        return self._run_command(["brew", "install", *packages])


# Registry of supported package managers
MANAGERS: dict[str, type[PackageManager]] = {
    "apt": AptManager,
    "dnf": DnfManager,
    "pacman": PacmanManager,
    "brew": BrewManager,
}

# Probe order on Linux; first match wins
LINUX_MANAGER_ORDER = ["apt", "dnf", "pacman"]

HOMEBREW_URL = "https://brew.sh"
