import os
from pathlib import Path
from typing import Optional

from kubex.exceptions import ConfigLoadError


def get_home_dir() -> Path:
    """Resolve the user's home directory from HOME, then USERPROFILE"""
    for var in ("HOME", "USERPROFILE"):
        value = os.environ.get(var)
        if value:
            return Path(value)
    raise ConfigLoadError("Unable to determine home directory.")


def default_kubeconfig_path(home: Optional[Path] = None) -> Path:
    return (home or get_home_dir()) / ".kube" / "config"


def alias_file_path(home: Optional[Path] = None) -> Path:
    return (home or get_home_dir()) / ".kubex" / "aliases.yaml"


def resolve_kubeconfig_path(option: Optional[str]) -> Path:
    """Pick the kubeconfig path: explicit option / $KUBECONFIG, else the per-user default"""
    if option:
        return Path(option).expanduser()
    return default_kubeconfig_path()
