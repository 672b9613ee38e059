from __future__ import annotations

import logging
from pathlib import Path

from ..lib.configs import install_user_file
from ..pipeline import RunContext

logger = logging.getLogger(__name__)

USER_CONFIGS = (
    (".zshrc", "zsh"),
    (".vimrc", "vim"),
)


class UserConfigsStep:
    step_id = "50_user_configs"
    label = "user-configs"

    def run(self, ctx: RunContext) -> int:
        configs_dir = Path(ctx.cfg.configs_dir)
        for filename, cfg_name in USER_CONFIGS:
            status = install_user_file(
                configs_dir / filename,
                ctx.user.home_dir,
                cfg_name,
                confirm=ctx.prompter.confirm_overwrite,
            )
            if status != 0:
                return status
        return 0
