import shlex
from pathlib import Path
from typing import Optional

import pytest

from nvimsetup.installer import Installer
from nvimsetup.models import CommandResult, Settings
from nvimsetup.prompt import CannedPrompt
from nvimsetup.runner import ProcessRunner

REPO_URL = "https://example.com/nvim-config.git"


class FakeRunner(ProcessRunner):
    """Records commands instead of running them.

    present: executables that which() finds.
    failing: command prefixes mapped to the exit status they fail with.
    """

    def __init__(self, present=(), failing=None):
        self.present = set(present)
        self.failing = dict(failing or {})
        self.probes: list[str] = []
        self.calls: list[tuple[list[str], bool]] = []

    def which(self, name: str) -> Optional[str]:
        self.probes.append(name)
        return f"/usr/bin/{name}" if name in self.present else None

    def run(self, cmd, privileged=False, capture=False) -> CommandResult:
        self.calls.append((list(cmd), privileged))
        cmd_str = shlex.join(cmd)
        for prefix, code in self.failing.items():
            if cmd_str.startswith(prefix):
                return CommandResult(
                    success=False,
                    message=f"'{cmd_str}' exited with status {code}",
                    returncode=code,
                )
        return CommandResult(success=True)

    @property
    def commands(self) -> list[list[str]]:
        return [cmd for cmd, _ in self.calls]


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(config_dir=tmp_path / "nvim", repo_url=REPO_URL)


@pytest.fixture
def make_installer(settings):
    """Factory for an Installer wired to fakes"""

    def _make(
        runner: FakeRunner,
        system: str = "Linux",
        answer: bool = True,
        prompt=None,
        **kwargs,
    ) -> Installer:
        return Installer(
            runner=runner,
            prompt=prompt or CannedPrompt(answer),
            settings=settings,
            system=lambda: system,
            **kwargs,
        )

    return _make
