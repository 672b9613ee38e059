"""Shared fixtures for the gnulinwiz test suite."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List, Optional

import pytest

from gnulinwiz.config import WizardConfig
from gnulinwiz.lib.command import CommandOutcome, CommandRunner, CommandSpec, ExitInfo
from gnulinwiz.lib.env import UserContext
from gnulinwiz.lib.prompt import Prompter
from gnulinwiz.pipeline import RunContext


class RecordingRunner(CommandRunner):
    """Test double: records every CommandSpec instead of spawning processes.

    ``fail_on`` maps a program name to the exit code it should report.
    """

    def __init__(self, *, fail_on: Optional[dict] = None, stdout: str = "", elevate=("sudo",)):
        super().__init__(elevate=elevate)
        self.fail_on = dict(fail_on or {})
        self.stdout = stdout
        self.calls: List[CommandSpec] = []

    def execute(self, spec: CommandSpec, *, discard_stdout: bool = False) -> CommandOutcome:
        self.calls.append(spec)
        code = self.fail_on.get(spec.program, 0)
        return CommandOutcome(
            argv=self.argv_for(spec),
            succeeded=code == 0,
            stdout="" if discard_stdout else self.stdout,
            stderr="boom" if code else "",
            exit_info=ExitInfo(code=code),
        )

    @property
    def argvs(self) -> List[List[str]]:
        return [self.argv_for(s) for s in self.calls]


def answers(*values: str) -> Callable[[str], str]:
    it = iter(values)

    def _input(_prompt: str) -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    return _input


@pytest.fixture
def home(tmp_path: Path) -> Path:
    h = tmp_path / "home" / "alice"
    h.mkdir(parents=True)
    return h


@pytest.fixture
def configs_dir(tmp_path: Path) -> Path:
    d = tmp_path / "configs"
    d.mkdir()
    (d / "iptables.rules").write_text("*filter\nCOMMIT\n", encoding="utf-8")
    (d / ".zshrc").write_text("plugins=(git)\n", encoding="utf-8")
    (d / ".vimrc").write_text("syntax on\n", encoding="utf-8")
    (d / "zram-generator.conf").write_text("[zram0]\n", encoding="utf-8")
    return d


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def make_ctx(home: Path, configs_dir: Path, runner: RecordingRunner):
    def _make(raw: Optional[dict] = None, *, input_fn=None, run=None) -> RunContext:
        cfg_raw = {"configs_dir": str(configs_dir)}
        cfg_raw.update(raw or {})
        return RunContext(
            cfg=WizardConfig(raw=cfg_raw),
            user=UserContext(name="alice", home_dir=home),
            runner=run or runner,
            prompter=Prompter(input_fn or answers(), assume_yes=False),
        )

    return _make


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for h in root.handlers:
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
    for attr in ("_gnulinwiz_log_path",):
        if hasattr(root, attr):
            delattr(root, attr)
