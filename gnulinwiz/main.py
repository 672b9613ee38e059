from __future__ import annotations

import argparse
import logging
from typing import Callable, List, Optional

from .config import POLICIES, WizardConfig, load_config
from .errors import ConfigError, WizardError
from .lib.command import CommandRunner
from .lib.env import EnvironmentSource, resolve_user_context
from .lib.privilege import PrivilegeDecision, PrivilegePolicy, enforce_privileges
from .lib.prompt import Prompter
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .pipeline import PipelineResult, RunContext, Step, run_pipeline
from .steps import (
    DefaultShellStep,
    FirewallApplyStep,
    FirewallFileStep,
    OhMyZshStep,
    RootConfigStep,
    SoftwareInstallStep,
    UserConfigsStep,
    ZramSwapStep,
    ZshPluginsStep,
)

logger = logging.getLogger(__name__)

LICENSE_NOTICE = (
    "gnulinwiz AKA GNU/Linux Config Wizard\n"
    "This program comes with ABSOLUTELY NO WARRANTY; for details see https://www.gnu.org/licenses/gpl-3.0.html\n"
    "This is free software, and you are welcome to redistribute it\n"
    "under certain conditions; for details see https://www.gnu.org/licenses/gpl-3.0.html\n"
)
SUCCESS_BANNER = "all set! your gnu/linux system is ready to use!"
FAILURE_BANNER = "something went wrong... please fix the reported problems and re-run the program."


def build_steps(skip: Optional[List[str]] = None) -> List[Step]:
    steps: List[Step] = [
        FirewallFileStep(),
        FirewallApplyStep(),
        SoftwareInstallStep(),
        DefaultShellStep(),
        OhMyZshStep(),
        ZshPluginsStep(),
        UserConfigsStep(),
        RootConfigStep(),
        ZramSwapStep(),
    ]
    skipped = set(skip or [])
    unknown = skipped - {s.step_id for s in steps}
    if unknown:
        raise ConfigError(
            f"unknown step id(s) to skip: {', '.join(sorted(unknown))} "
            f"(valid: {', '.join(s.step_id for s in steps)})"
        )
    for s in steps:
        if s.step_id in skipped:
            logger.info("Skipping step %s (disabled by configuration)", s.step_id)
    return [s for s in steps if s.step_id not in skipped]


def _exit_status(code: int) -> int:
    # A nonzero status must never wrap around to 0 as a process exit code.
    if code != 0 and code % 256 == 0:
        return 1
    return code


def run(
    cfg: WizardConfig,
    *,
    env: Optional[EnvironmentSource] = None,
    euid: Optional[int] = None,
    input_fn: Optional[Callable[[str], str]] = None,
    steps: Optional[List[Step]] = None,
) -> PipelineResult:
    """Gate privileges, resolve the user and run the setup steps.

    Raises WizardError for failures that happen before the first step.
    """

    decision = enforce_privileges(cfg.privilege_policy, allow_non_root=cfg.allow_non_root, euid=euid)

    user = resolve_user_context(env)
    logger.info("username: %s", user.name)
    logger.info("home location: %s", user.home_dir)

    # Already root: run root commands directly instead of through the front-end.
    elevate = [] if decision is PrivilegeDecision.ALLOWED_ROOT else cfg.elevate
    ctx = RunContext(
        cfg=cfg,
        user=user,
        runner=CommandRunner(elevate=elevate, dry_run=cfg.dry_run),
        prompter=Prompter(input_fn or input, assume_yes=cfg.assume_yes),
        privilege=decision,
    )

    return run_pipeline(
        steps=build_steps(cfg.skip_steps) if steps is None else steps,
        ctx=ctx,
        policy=cfg.policy,
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="gnulinwiz", description="GNU/Linux post-installation setup assistant")
    p.add_argument("--config", default=None, help="Path to a YAML config file")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to the log file")
    p.add_argument("--policy", choices=POLICIES, default=None, help="Stop at the first failed step or run them all")
    p.add_argument(
        "--privilege-policy",
        choices=[pp.value for pp in PrivilegePolicy],
        default=None,
        help="Refuse to run as root (default) or require root",
    )
    p.add_argument(
        "--allow-non-root",
        action="store_true",
        default=None,
        help="With require-root, continue as a normal user and elevate each command",
    )
    p.add_argument("--yes", action="store_true", default=None, help="Overwrite existing dotfiles without asking")
    p.add_argument("--dry-run", action="store_true", default=None, help="Log commands without running them")
    p.add_argument("--skip", action="append", default=None, metavar="STEP_ID", help="Skip a step (repeatable)")
    p.add_argument("--verbose", action="store_true", help="Log captured command output")
    return p


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    print(LICENSE_NOTICE)
    configure_logging(log_path=args.log, verbose=args.verbose)

    try:
        cfg = load_config(args.config).with_overrides(
            policy=args.policy,
            privilege_policy=args.privilege_policy,
            allow_non_root=args.allow_non_root,
            assume_yes=args.yes,
            dry_run=args.dry_run,
            skip_steps=args.skip,
        )
    except (OSError, ValueError) as e:
        logger.error("config error: %s", e)
        print(FAILURE_BANNER)
        return 1

    try:
        result = run(cfg)
    except WizardError as e:
        logger.error("error: %s", e)
        print(FAILURE_BANNER)
        return _exit_status(e.status)

    if not result.succeeded:
        print("failed steps: " + ", ".join(f"{r.label} ({r.status})" for r in result.failed))
        print(FAILURE_BANNER)
        return _exit_status(result.exit_code)

    print(SUCCESS_BANNER)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
