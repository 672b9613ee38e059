from __future__ import annotations

import logging

from ..errors import WizardError
from ..pipeline import RunContext

logger = logging.getLogger(__name__)


class FirewallApplyStep:
    step_id = "15_firewall_apply"
    label = "firewall-apply"

    def run(self, ctx: RunContext) -> int:
        rules_path = ctx.cfg.iptables_rules_path
        # iptables-restore reads the file itself; no shell redirection needed.
        try:
            ctx.runner.run_as_root("iptables-restore", [rules_path])
        except WizardError as e:
            logger.error("error applying iptables rules: %s", e)
            return e.status

        logger.info("iptables.rules set successfully")
        return 0
