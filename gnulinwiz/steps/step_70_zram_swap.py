from __future__ import annotations

import logging
from pathlib import Path

from ..errors import SourceUnreadable, WizardError
from ..pipeline import RunContext

logger = logging.getLogger(__name__)


class ZramSwapStep:
    step_id = "70_zram_swap"
    label = "zram-swap"

    def run(self, ctx: RunContext) -> int:
        source = Path(ctx.cfg.configs_dir) / "zram-generator.conf"
        if not source.is_file():
            raise SourceUnreadable(str(source), "no such file")

        try:
            ctx.runner.run_as_root("cp", [str(source), ctx.cfg.zram_config_dir])
        except WizardError as e:
            logger.error("error copying zram-generator.conf: %s", e)
            return e.status

        logger.info("zram swap configuration copied successfully.")
        return 0
