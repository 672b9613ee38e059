from __future__ import annotations

import contextlib
import logging
import shlex
import subprocess
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import IO, Dict, List, Optional, Sequence, Tuple

from ..errors import NonZeroExit, SpawnFailed, StdinWriteFailed

logger = logging.getLogger(__name__)


class Privilege(str, Enum):
    USER = "user"
    ROOT = "root"


@dataclass(frozen=True)
class ExitInfo:
    """How a child terminated: an exit ``code`` or a terminating ``signal``."""

    code: Optional[int] = None
    signal: Optional[int] = None

    @classmethod
    def from_returncode(cls, returncode: int) -> "ExitInfo":
        # subprocess reports death-by-signal as -N
        if returncode < 0:
            return cls(signal=-returncode)
        return cls(code=returncode)

    @property
    def success(self) -> bool:
        return self.signal is None and self.code == 0

    def __str__(self) -> str:
        if self.signal is not None:
            return f"signal {self.signal}"
        return f"exit code {self.code}"


@dataclass(frozen=True)
class CommandSpec:
    program: str
    args: Tuple[str, ...] = ()
    privilege: Privilege = Privilege.USER
    stdin: Optional[bytes] = None

    @classmethod
    def build(
        cls,
        program: str,
        args: Sequence[str] = (),
        *,
        privilege: Privilege = Privilege.USER,
        stdin: Optional[bytes] = None,
    ) -> "CommandSpec":
        return cls(program=program, args=tuple(str(a) for a in args), privilege=privilege, stdin=stdin)


@dataclass(frozen=True)
class CommandOutcome:
    argv: List[str]
    succeeded: bool
    stdout: str
    stderr: str
    exit_info: ExitInfo = field(default_factory=lambda: ExitInfo(code=0))


def _fmt_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def _decode(data: Optional[bytes]) -> str:
    if not data:
        return ""
    return data.decode("utf-8", errors="replace")


def _drain(stream: IO[bytes], name: str, sink: Dict[str, bytes]) -> None:
    with stream:
        sink[name] = stream.read()


class CommandRunner:
    """Run external programs as the current user or through an elevation front-end.

    Every privileged mutation goes through ``run_as_root`` or
    ``run_as_root_with_stdin`` so failures are reported the same way.

    - Always logs the command.
    - Success is decided by exit status only; stderr output on a zero exit
      (package manager warnings and the like) is not a failure.
    - dry_run logs but does not execute.
    """

    def __init__(self, *, elevate: Sequence[str] = ("sudo",), dry_run: bool = False) -> None:
        self.elevate = list(elevate)
        self.dry_run = dry_run

    def argv_for(self, spec: CommandSpec) -> List[str]:
        argv = [spec.program, *spec.args]
        if spec.privilege is Privilege.ROOT:
            argv = [*self.elevate, *argv]
        return argv

    def execute(self, spec: CommandSpec, *, discard_stdout: bool = False) -> CommandOutcome:
        """Run ``spec`` and return its outcome.

        Raises SpawnFailed if the program cannot be started and
        StdinWriteFailed if piped input cannot be delivered. A child that
        runs and fails is *not* an exception here; see ``succeeded``.
        """

        argv = self.argv_for(spec)
        cmd_str = _fmt_argv(argv)
        logger.info("CMD %s", cmd_str)

        if self.dry_run:
            return CommandOutcome(argv=argv, succeeded=True, stdout="", stderr="")

        if spec.stdin is None:
            try:
                p = subprocess.run(
                    argv,
                    stdin=subprocess.DEVNULL,
                    stdout=subprocess.DEVNULL if discard_stdout else subprocess.PIPE,
                    stderr=subprocess.PIPE,
                )
            except OSError as e:
                raise SpawnFailed(spec.program, str(e)) from e
            stdout, stderr, returncode = p.stdout, p.stderr, p.returncode
        else:
            stdout, stderr, returncode = self._run_with_stdin(
                argv, spec.program, spec.stdin, discard_stdout=discard_stdout
            )

        out = _decode(stdout)
        err = _decode(stderr)
        if out:
            logger.debug("STDOUT %s", out.strip())
        if err:
            logger.debug("STDERR %s", err.strip())

        exit_info = ExitInfo.from_returncode(returncode)
        return CommandOutcome(
            argv=argv,
            succeeded=exit_info.success,
            stdout=out,
            stderr=err,
            exit_info=exit_info,
        )

    def _run_with_stdin(
        self,
        argv: List[str],
        program: str,
        data: bytes,
        *,
        discard_stdout: bool,
    ) -> Tuple[Optional[bytes], Optional[bytes], int]:
        try:
            p = subprocess.Popen(
                argv,
                stdin=subprocess.PIPE,
                stdout=subprocess.DEVNULL if discard_stdout else subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except OSError as e:
            raise SpawnFailed(program, str(e)) from e

        # Output pipes are drained on reader threads while stdin is written,
        # so a child that fills stderr before reading its input cannot block us.
        # communicate() would hide a broken pipe, hence the explicit write.
        collected: Dict[str, bytes] = {}
        readers = [
            threading.Thread(target=_drain, args=(stream, name, collected), daemon=True)
            for name, stream in (("stdout", p.stdout), ("stderr", p.stderr))
            if stream is not None
        ]
        for t in readers:
            t.start()

        try:
            p.stdin.write(data)  # type: ignore[union-attr]
            p.stdin.close()  # type: ignore[union-attr]
        except OSError as e:
            p.kill()
            # the pipe is already broken; closing only discards what is left in the buffer
            with contextlib.suppress(OSError):
                p.stdin.close()  # type: ignore[union-attr]
            p.wait()
            for t in readers:
                t.join()
            raise StdinWriteFailed(program, str(e)) from e

        for t in readers:
            t.join()
        return collected.get("stdout"), collected.get("stderr", b""), p.wait()

    def check(self, spec: CommandSpec, *, discard_stdout: bool = False) -> CommandOutcome:
        outcome = self.execute(spec, discard_stdout=discard_stdout)
        if not outcome.succeeded:
            raise NonZeroExit(_fmt_argv(outcome.argv), outcome.stdout, outcome.stderr, outcome.exit_info)
        return outcome

    def run_as_user(self, program: str, args: Sequence[str] = ()) -> CommandOutcome:
        return self.check(CommandSpec.build(program, args))

    def run_as_root(self, program: str, args: Sequence[str] = ()) -> CommandOutcome:
        return self.check(CommandSpec.build(program, args, privilege=Privilege.ROOT))

    def run_as_root_with_stdin(self, program: str, args: Sequence[str], data: bytes) -> CommandOutcome:
        spec = CommandSpec.build(program, args, privilege=Privilege.ROOT, stdin=data)
        return self.check(spec, discard_stdout=True)
