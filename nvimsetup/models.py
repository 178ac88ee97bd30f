from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass
class CommandResult:
    """Result of a command execution"""

    success: bool
    message: str = ""
    returncode: int = 0
    output: str = ""


@dataclass
class Settings:
    """Resolved settings for a single run"""

    config_dir: Path
    repo_url: str
    branch: Optional[str] = None
    editor: str = "nvim"
    extra_packages: list[str] = field(default_factory=list)
    source: Optional[Path] = None  # YAML file the settings were read from


# =============================================================================
# Errors
# =============================================================================


class InstallerError(Exception):
    """A fatal condition that ends the run"""

    exit_code = 1

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnsupportedEnvironment(InstallerError):
    """The host is missing something the installer cannot provide itself"""


class OperatorDeclined(InstallerError):
    """The operator answered no to a confirmation"""


class CommandFailed(InstallerError):
    """An external command exited non-zero"""

    def __init__(self, message: str, result: CommandResult):
        super().__init__(message)
        self.result = result
        self.exit_code = result.returncode or 1
