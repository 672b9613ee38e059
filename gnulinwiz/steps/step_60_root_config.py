from __future__ import annotations

from ..lib.configs import mirror_privileged
from ..pipeline import RunContext

ROOT_MIRRORED_ITEMS = (".oh-my-zsh", ".zshrc", ".vimrc")


class RootConfigStep:
    step_id = "60_root_config"
    label = "root-config"

    def run(self, ctx: RunContext) -> int:
        return mirror_privileged(ctx.user.home_dir, ROOT_MIRRORED_ITEMS, ctx.cfg.root_home, ctx.runner)
