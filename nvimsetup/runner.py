"""
External command execution.

Everything the installer does to the host goes through a ProcessRunner, so
the installer itself never touches subprocess or PATH lookups directly.
"""

import os
import shlex
import shutil
import subprocess
from abc import ABC, abstractmethod
from typing import Optional

from nvimsetup.models import CommandResult
from nvimsetup.ui import console


class ProcessRunner(ABC):
    """Abstract interface for probing and running external commands"""

    @abstractmethod
    def which(self, name: str) -> Optional[str]:
        """Return the full path of an executable, or None if absent"""
        pass

    @abstractmethod
    def run(
        self, cmd: list[str], privileged: bool = False, capture: bool = False
    ) -> CommandResult:
        """Run a command to completion and report its exit status"""
        pass

    def is_available(self, name: str) -> bool:
        return self.which(name) is not None


class SubprocessRunner(ProcessRunner):
    """Runs commands on the host with subprocess"""

    def __init__(self, dry_run: bool = False):
        self.dry_run = dry_run

    def which(self, name: str) -> Optional[str]:
        return shutil.which(name)

    def _elevate(self, cmd: list[str]) -> list[str]:
        """Prefix sudo unless we are already root"""
        if os.geteuid() == 0:
            return cmd
        return ["sudo", *cmd]

    def run(
        self, cmd: list[str], privileged: bool = False, capture: bool = False
    ) -> CommandResult:
        """Execute a command, streaming its output unless capture is set"""
        if privileged:
            cmd = self._elevate(cmd)
        cmd_str = shlex.join(cmd)

        if self.dry_run:
            console.print(f"  [dim]Would run:[/] {cmd_str}")
            return CommandResult(success=True)

        console.print(f"  [dim]$[/] {cmd_str}")

        try:
            if capture:
                result = subprocess.run(
                    cmd,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.STDOUT,
                    text=True,
                    check=False,
                )
            else:
                result = subprocess.run(cmd, check=False, capture_output=False)
        except FileNotFoundError:
            return CommandResult(
                success=False,
                message=f"Command not found: {cmd[0]}",
                returncode=127,
            )

        output = (result.stdout or "") if capture else ""
        if result.returncode != 0:
            return CommandResult(
                success=False,
                message=f"'{cmd_str}' exited with status {result.returncode}",
                returncode=result.returncode,
                output=output,
            )
        return CommandResult(success=True, output=output)
