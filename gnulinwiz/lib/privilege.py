from __future__ import annotations

import logging
import os
from enum import Enum
from typing import Optional

from ..errors import ConfigError, PrivilegeDenied

logger = logging.getLogger(__name__)


class PrivilegePolicy(str, Enum):
    DENY_ROOT = "deny-root"
    REQUIRE_ROOT = "require-root"

    @classmethod
    def parse(cls, value: str) -> "PrivilegePolicy":
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ConfigError(
                f"unknown privilege policy {value!r} (expected one of: {', '.join(p.value for p in cls)})"
            ) from None


class PrivilegeDecision(str, Enum):
    ALLOWED_NON_ROOT = "allowed-non-root"
    ALLOWED_ROOT = "allowed-root"
    DENIED = "denied"


def check_privileges(
    policy: PrivilegePolicy,
    *,
    allow_non_root: bool = False,
    euid: Optional[int] = None,
) -> PrivilegeDecision:
    uid = os.geteuid() if euid is None else euid
    is_root = uid == 0

    if policy is PrivilegePolicy.DENY_ROOT:
        return PrivilegeDecision.DENIED if is_root else PrivilegeDecision.ALLOWED_NON_ROOT

    if is_root:
        return PrivilegeDecision.ALLOWED_ROOT
    if allow_non_root:
        return PrivilegeDecision.ALLOWED_NON_ROOT
    return PrivilegeDecision.DENIED


def enforce_privileges(
    policy: PrivilegePolicy,
    *,
    allow_non_root: bool = False,
    euid: Optional[int] = None,
) -> PrivilegeDecision:
    """Check once at startup; raise PrivilegeDenied instead of exiting."""

    decision = check_privileges(policy, allow_non_root=allow_non_root, euid=euid)
    logger.info("Privilege check: policy=%s decision=%s", policy.value, decision.value)

    if decision is PrivilegeDecision.DENIED:
        if policy is PrivilegePolicy.DENY_ROOT:
            raise PrivilegeDenied(
                "this program is not recommended to run with root privileges. "
                "please run it with your current user.\nexample: gnulinwiz"
            )
        raise PrivilegeDenied(
            "this program must run with root privileges. "
            "re-run it as root or pass --allow-non-root to elevate each command instead."
        )
    return decision
