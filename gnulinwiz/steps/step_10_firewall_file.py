from __future__ import annotations

import logging
from pathlib import Path

from ..errors import SourceUnreadable, WizardError
from ..pipeline import RunContext

logger = logging.getLogger(__name__)


class FirewallFileStep:
    step_id = "10_firewall_file"
    label = "firewall-file"

    def run(self, ctx: RunContext) -> int:
        source = Path(ctx.cfg.configs_dir) / "iptables.rules"
        dest = ctx.cfg.iptables_rules_path

        try:
            rules = source.read_bytes()
        except OSError as e:
            raise SourceUnreadable(str(source), e.strerror or str(e)) from e

        try:
            ctx.runner.run_as_root_with_stdin("tee", [dest], rules)
        except WizardError as e:
            logger.error("failed to write iptables rules to '%s': %s", dest, e)
            return e.status

        logger.info("iptables.rules created successfully")
        return 0
