"""gnulinwiz AKA GNU/Linux Config Wizard: post-installation setup assistant.

Core design goals:
- One linear pass over a fixed list of steps
- Uniform external command execution (user, root, root with piped input)
- Fail-fast or collect-all status reporting
- Re-runnable dotfile installation
- Centralized logging
"""

__all__ = []
