from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .errors import ConfigError
from .lib.env import PATHS
from .lib.privilege import PrivilegePolicy

DEFAULT_PACKAGES = [
    "firefox",
    "clang",
    "zsh",
    "git",
    "gimp",
    "mpv",
    "spectacle",
    "curl",
]

POLICIES = ("fail-fast", "collect-all")
SOFTWARE_CHOICES = ("ask", "default", "custom")


def _default_configs_dir() -> Path:
    # gnulinwiz/config.py -> gnulinwiz -> repo root
    return Path(__file__).resolve().parents[1] / "configs"


def _str_list(value: Any, key: str) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    if not isinstance(value, list):
        raise ConfigError(f"{key} must be a list of strings")
    return [str(v) for v in value]


@dataclass(frozen=True)
class WizardConfig:
    raw: Dict[str, Any]
    base_dir: Optional[Path] = None

    def _flag(self, key: str) -> bool:
        value = self.raw.get(key)
        if value is None:
            return False
        # YAML "false" in quotes is a non-empty string, i.e. truthy
        if not isinstance(value, bool):
            raise ConfigError(f"{key} must be true or false, got {value!r}")
        return value

    @property
    def policy(self) -> str:
        value = str(self.raw.get("policy") or "fail-fast").strip().lower()
        if value not in POLICIES:
            raise ConfigError(f"unknown policy {value!r} (expected one of: {', '.join(POLICIES)})")
        return value

    @property
    def privilege_policy(self) -> PrivilegePolicy:
        return PrivilegePolicy.parse(self.raw.get("privilege_policy") or PrivilegePolicy.DENY_ROOT.value)

    @property
    def allow_non_root(self) -> bool:
        return self._flag("allow_non_root")

    @property
    def elevate(self) -> List[str]:
        if "elevate" not in self.raw:
            return ["sudo"]
        return _str_list(self.raw.get("elevate"), "elevate")

    @property
    def configs_dir(self) -> Path:
        value = self.raw.get("configs_dir")
        if not value:
            return _default_configs_dir()
        p = Path(str(value)).expanduser()
        if not p.is_absolute() and self.base_dir is not None:
            p = self.base_dir / p
        return p

    @property
    def assume_yes(self) -> bool:
        return self._flag("assume_yes")

    @property
    def dry_run(self) -> bool:
        return self._flag("dry_run")

    @property
    def skip_steps(self) -> List[str]:
        return _str_list(self.raw.get("skip_steps"), "skip_steps")

    @property
    def shell(self) -> str:
        return str(self.raw.get("shell") or "/usr/bin/zsh")

    @property
    def _software(self) -> Dict[str, Any]:
        sw = self.raw.get("software") or {}
        if not isinstance(sw, dict):
            raise ConfigError("software must be a mapping")
        return sw

    @property
    def software_choice(self) -> str:
        value = str(self._software.get("choice") or "ask").strip().lower()
        if value not in SOFTWARE_CHOICES:
            raise ConfigError(f"software.choice must be one of: {', '.join(SOFTWARE_CHOICES)}")
        return value

    @property
    def default_packages(self) -> List[str]:
        if "packages" not in self._software:
            return list(DEFAULT_PACKAGES)
        return _str_list(self._software.get("packages"), "software.packages")

    @property
    def package_manager(self) -> str:
        return str(self._software.get("package_manager") or "pacman")

    @property
    def install_args(self) -> List[str]:
        if "install_args" not in self._software:
            return ["-Sy"]
        return _str_list(self._software.get("install_args"), "software.install_args")

    @property
    def trailing_args(self) -> List[str]:
        if "trailing_args" not in self._software:
            return ["--noconfirm"]
        return _str_list(self._software.get("trailing_args"), "software.trailing_args")

    @property
    def _paths(self) -> Dict[str, Any]:
        return self.raw.get("paths") or {}

    @property
    def iptables_rules_path(self) -> str:
        return str(self._paths.get("iptables_rules") or PATHS.iptables_rules)

    @property
    def root_home(self) -> str:
        return str(self._paths.get("root_home") or PATHS.root_home)

    @property
    def zram_config_dir(self) -> str:
        return str(self._paths.get("zram_config_dir") or PATHS.zram_config_dir)

    def with_overrides(self, **overrides: Any) -> "WizardConfig":
        """Return a copy with CLI values layered over the file; None means 'not given'."""

        raw = dict(self.raw)
        for key, value in overrides.items():
            if value is not None:
                raw[key] = value
        return WizardConfig(raw=raw, base_dir=self.base_dir)


def load_config(path: Optional[str]) -> WizardConfig:
    if not path:
        return WizardConfig(raw={})

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("gnulinwiz config must be YAML")

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {p}: {e}") from e
    if not isinstance(raw, dict):
        raise ValueError("gnulinwiz config must contain a mapping/object")

    return WizardConfig(raw=raw, base_dir=p.resolve().parent)
