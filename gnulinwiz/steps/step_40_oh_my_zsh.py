from __future__ import annotations

import logging

from ..errors import WizardError
from ..lib.command import CommandSpec
from ..pipeline import RunContext

logger = logging.getLogger(__name__)

OMZ_INSTALLER_URL = "https://raw.githubusercontent.com/ohmyzsh/ohmyzsh/master/tools/install.sh"


class OhMyZshStep:
    step_id = "40_oh_my_zsh"
    label = "oh-my-zsh"

    def run(self, ctx: RunContext) -> int:
        if ctx.user.omz_dir.exists():
            logger.info("Oh My Zsh already installed.")
            return 0

        try:
            script = ctx.runner.run_as_user("curl", ["-fsSL", OMZ_INSTALLER_URL]).stdout
            # --unattended: no shell switch and no interactive zsh at the end
            ctx.runner.check(
                CommandSpec.build("sh", ["-s", "--", "--unattended"], stdin=script.encode("utf-8"))
            )
        except WizardError as e:
            logger.error("Oh My Zsh failed: %s", e)
            return e.status

        logger.info("Oh My Zsh installed.")
        return 0
