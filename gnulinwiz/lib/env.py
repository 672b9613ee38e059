from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from ..errors import InvalidHome, MissingVariable

logger = logging.getLogger(__name__)

# Anything with a dict-like ``get``; os.environ in production, a plain dict in tests.
EnvironmentSource = Mapping[str, str]


@dataclass(frozen=True)
class Paths:
    iptables_rules: str = "/etc/iptables/iptables.rules"
    root_home: str = "/root"
    zram_config_dir: str = "/etc/systemd/"
    log_default: str = "/var/log/gnulinwiz.log"


PATHS = Paths()


@dataclass(frozen=True)
class UserContext:
    name: str
    home_dir: Path

    @property
    def omz_dir(self) -> Path:
        return self.home_dir / ".oh-my-zsh"


def _require(env: EnvironmentSource, name: str) -> str:
    value = (env.get(name) or "").strip()
    if not value:
        raise MissingVariable(name)
    return value


def resolve_user_context(env: Optional[EnvironmentSource] = None, *, check_home: bool = True) -> UserContext:
    """Resolve the invoking user's name and home directory from USER and HOME.

    An empty value is rejected the same way as an absent one.
    """

    source = os.environ if env is None else env
    name = _require(source, "USER")
    home = _require(source, "HOME")

    home_dir = Path(home)
    if check_home and not home_dir.is_dir():
        raise InvalidHome(home)

    return UserContext(name=name, home_dir=home_dir)
