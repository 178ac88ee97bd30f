"""
Tests for SubprocessRunner against real, harmless child processes.
"""

import subprocess
import sys

import pytest

from nvimsetup import runner as runner_module
from nvimsetup.runner import SubprocessRunner


class TestRun:
    def test_success(self):
        result = SubprocessRunner().run([sys.executable, "-c", "pass"])
        assert result.success
        assert result.returncode == 0

    def test_failure_keeps_exit_status(self):
        result = SubprocessRunner().run([sys.executable, "-c", "raise SystemExit(3)"])
        assert not result.success
        assert result.returncode == 3
        assert "status 3" in result.message

    def test_capture_combines_streams(self):
        code = "import sys; print('out'); print('err', file=sys.stderr)"
        result = SubprocessRunner().run([sys.executable, "-c", code], capture=True)
        assert "out" in result.output
        assert "err" in result.output

    def test_missing_executable(self):
        result = SubprocessRunner().run(["nvimsetup-no-such-command"])
        assert not result.success
        assert result.returncode == 127
        assert "not found" in result.message


class TestDryRun:
    def test_nothing_is_executed(self, monkeypatch, capsys):
        def fail(*args, **kwargs):
            raise AssertionError("subprocess.run called during dry run")

        monkeypatch.setattr(subprocess, "run", fail)
        result = SubprocessRunner(dry_run=True).run(["apt-get", "update"])

        assert result.success
        assert "Would run" in capsys.readouterr().out


class TestPrivileged:
    @pytest.fixture
    def recorded(self, monkeypatch):
        calls = []

        def fake_run(cmd, **kwargs):
            calls.append(cmd)
            return subprocess.CompletedProcess(cmd, 0)

        monkeypatch.setattr(subprocess, "run", fake_run)
        return calls

    def test_sudo_prefix_for_normal_user(self, monkeypatch, recorded):
        monkeypatch.setattr(runner_module.os, "geteuid", lambda: 1000)
        SubprocessRunner().run(["dnf", "install", "-y", "git"], privileged=True)
        assert recorded == [["sudo", "dnf", "install", "-y", "git"]]

    def test_no_sudo_as_root(self, monkeypatch, recorded):
        monkeypatch.setattr(runner_module.os, "geteuid", lambda: 0)
        SubprocessRunner().run(["dnf", "install", "-y", "git"], privileged=True)
        assert recorded == [["dnf", "install", "-y", "git"]]

    def test_unprivileged_is_untouched(self, monkeypatch, recorded):
        monkeypatch.setattr(runner_module.os, "geteuid", lambda: 1000)
        SubprocessRunner().run(["brew", "install", "git"])
        assert recorded == [["brew", "install", "git"]]


def test_which_finds_python():
    assert SubprocessRunner().which("nvimsetup-no-such-command") is None
    assert SubprocessRunner().is_available(sys.executable)
