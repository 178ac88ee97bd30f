__version__ = "0.1.0"

from nvimsetup.installer import Installer
from nvimsetup.managers import MANAGERS
from nvimsetup.models import (
    CommandFailed,
    CommandResult,
    InstallerError,
    OperatorDeclined,
    Settings,
    UnsupportedEnvironment,
)

__all__ = [
    "__version__",
    "CommandFailed",
    "CommandResult",
    "Installer",
    "InstallerError",
    "MANAGERS",
    "OperatorDeclined",
    "Settings",
    "UnsupportedEnvironment",
]
