from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Protocol, Sequence

from .config import WizardConfig
from .errors import WizardError
from .lib.command import CommandRunner
from .lib.env import UserContext
from .lib.privilege import PrivilegeDecision
from .lib.prompt import Prompter

logger = logging.getLogger(__name__)

FAIL_FAST = "fail-fast"
COLLECT_ALL = "collect-all"

# Exit code for a collect-all run with one or more failed steps.
COLLECT_ALL_FAILURE = 1


@dataclass(frozen=True)
class RunContext:
    cfg: WizardConfig
    user: UserContext
    runner: CommandRunner
    prompter: Prompter
    privilege: PrivilegeDecision = PrivilegeDecision.ALLOWED_NON_ROOT


class Step(Protocol):
    """A single named configuration action. ``run`` returns 0 on success."""

    step_id: str
    label: str

    def run(self, ctx: RunContext) -> int:
        ...


@dataclass(frozen=True)
class StepResult:
    label: str
    status: int
    step_id: str = ""

    @property
    def ok(self) -> bool:
        return self.status == 0


@dataclass(frozen=True)
class PipelineResult:
    results: List[StepResult]
    policy: str
    exit_code: int

    @property
    def failed(self) -> List[StepResult]:
        return [r for r in self.results if not r.ok]

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


def _run_step(step: Step, ctx: RunContext) -> int:
    try:
        return int(step.run(ctx))
    except WizardError as e:
        logger.error("%s: %s", step.label, e)
        return e.status


def run_pipeline(*, steps: Sequence[Step], ctx: RunContext, policy: str = FAIL_FAST) -> PipelineResult:
    """Run steps in order and decide the run's exit code. Never exits the process."""

    if policy not in (FAIL_FAST, COLLECT_ALL):
        raise ValueError(f"unknown pipeline policy: {policy}")

    results: List[StepResult] = []

    for step in steps:
        logger.info("Running step %s", step.step_id)
        status = _run_step(step, ctx)
        result = StepResult(label=step.label, status=status, step_id=step.step_id)
        results.append(result)

        if result.ok:
            continue

        logger.error("Step %s failed with status %s", step.label, status)
        if policy == FAIL_FAST:
            return PipelineResult(results=results, policy=policy, exit_code=status)

    failed = [r for r in results if not r.ok]
    for r in failed:
        logger.error("failed step: %s (status %s)", r.label, r.status)

    exit_code = COLLECT_ALL_FAILURE if failed else 0
    return PipelineResult(results=results, policy=policy, exit_code=exit_code)
