import os
from pathlib import Path
from typing import Mapping, Optional

import yaml

from nvimsetup.models import Settings, UnsupportedEnvironment

DEFAULT_REPO_URL = "https://github.com/nvim-lua/kickstart.nvim.git"
SETTINGS_FILENAME = "nvimsetup.yaml"
CONFIG_ENV_VAR = "NVIMSETUP_CONFIG"


def config_home(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Return $XDG_CONFIG_HOME, falling back to $HOME/.config"""
    if environ is None:
        environ = os.environ

    xdg = environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg)

    home = environ.get("HOME")
    if not home:
        raise UnsupportedEnvironment(
            "Neither XDG_CONFIG_HOME nor HOME is set; cannot locate the config directory"
        )
    return Path(home) / ".config"


def _find_settings_file(
    config: Optional[str], environ: Mapping[str, str], home: Path
) -> Optional[Path]:
    """Locate the settings file; an explicitly named file must exist"""
    if not config:
        config = environ.get(CONFIG_ENV_VAR)

    if config:
        path = Path(config).expanduser()
        if not path.is_file():
            raise UnsupportedEnvironment(f"Settings file not found: {path}")
        return path

    default = home / SETTINGS_FILENAME
    return default if default.is_file() else None


def _read_settings_file(path: Path) -> dict:
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise UnsupportedEnvironment(f"Invalid YAML in {path}: {e}")

    if not isinstance(data, dict):
        raise UnsupportedEnvironment(f"Expected a mapping at the top of {path}")

    for key in ("repo", "branch", "editor"):
        if key in data and not isinstance(data[key], str):
            raise UnsupportedEnvironment(f"'{key}' in {path} must be a string")

    packages = data.get("packages", [])
    if not isinstance(packages, list) or not all(isinstance(p, str) for p in packages):
        raise UnsupportedEnvironment(f"'packages' in {path} must be a list of names")

    return data


def load_settings(
    config: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Resolve settings from defaults, an optional YAML file and the environment.

    Args:
        config: Explicit settings file (the --config option).
        environ: Environment mapping; defaults to os.environ.
    """
    if environ is None:
        environ = os.environ

    home = config_home(environ)
    path = _find_settings_file(config, environ, home)
    data = _read_settings_file(path) if path else {}

    return Settings(
        config_dir=home / "nvim",
        repo_url=data.get("repo") or DEFAULT_REPO_URL,
        branch=data.get("branch") or None,
        editor=data.get("editor") or "nvim",
        extra_packages=list(data.get("packages", [])),
        source=path,
    )
