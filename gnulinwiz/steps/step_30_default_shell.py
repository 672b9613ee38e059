from __future__ import annotations

import logging

from ..errors import WizardError
from ..pipeline import RunContext

logger = logging.getLogger(__name__)


class DefaultShellStep:
    step_id = "30_default_shell"
    label = "default-shell"

    def run(self, ctx: RunContext) -> int:
        shell = ctx.cfg.shell
        for name in (ctx.user.name, "root"):
            try:
                ctx.runner.run_as_root("chsh", ["-s", shell, name])
            except WizardError as e:
                logger.error("Failed to set %s for %s: %s", shell, name, e)
                return e.status
            logger.info("%s set for %s", shell, name)
        return 0
