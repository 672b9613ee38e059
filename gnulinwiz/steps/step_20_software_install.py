from __future__ import annotations

import logging
from typing import List

from ..errors import InvalidInput, WizardError
from ..pipeline import RunContext

logger = logging.getLogger(__name__)


class SoftwareInstallStep:
    step_id = "20_software_install"
    label = "software-install"

    def _select_packages(self, ctx: RunContext) -> List[str]:
        choice = ctx.cfg.software_choice
        if choice == "ask":
            custom = ctx.prompter.choose_custom_packages()
        else:
            custom = choice == "custom"

        if custom:
            return ctx.prompter.read_package_list()
        return ctx.cfg.default_packages

    def run(self, ctx: RunContext) -> int:
        packages = self._select_packages(ctx)
        if not packages:
            raise InvalidInput("no software packages to install")

        cfg = ctx.cfg
        args = [*cfg.install_args, *packages, *cfg.trailing_args]
        logger.info("installation takes a few minutes, please wait...")
        try:
            ctx.runner.run_as_root(cfg.package_manager, args)
        except WizardError as e:
            logger.error("software installation failed: %s", e)
            return e.status

        logger.info("software installed successfully: %s", " ".join(packages))
        return 0
