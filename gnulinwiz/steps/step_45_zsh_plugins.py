from __future__ import annotations

import logging
from typing import Tuple

from ..errors import WizardError
from ..pipeline import RunContext

logger = logging.getLogger(__name__)

ZSH_PLUGINS: Tuple[Tuple[str, str], ...] = (
    ("zsh-autosuggestions", "https://github.com/zsh-users/zsh-autosuggestions"),
    ("zsh-syntax-highlighting", "https://github.com/zsh-users/zsh-syntax-highlighting.git"),
)


class ZshPluginsStep:
    step_id = "45_zsh_plugins"
    label = "zsh-plugins"

    def _install_plugin(self, ctx: RunContext, name: str, repo_url: str) -> int:
        path = ctx.user.omz_dir / "custom" / "plugins" / name
        if path.exists():
            logger.info("%s already installed.", name)
            return 0

        try:
            ctx.runner.run_as_user("git", ["clone", repo_url, str(path)])
        except WizardError as e:
            logger.error("Failed to install %s: %s", name, e)
            return e.status

        logger.info("%s installed.", name)
        return 0

    def run(self, ctx: RunContext) -> int:
        for name, url in ZSH_PLUGINS:
            status = self._install_plugin(ctx, name, url)
            if status != 0:
                return status
        return 0
