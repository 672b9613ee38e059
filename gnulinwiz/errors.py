from __future__ import annotations

from typing import Optional


class WizardError(RuntimeError):
    """Base error. ``status`` is the step status / exit code it maps to."""

    status = 1


class ConfigError(WizardError, ValueError):
    pass


class InvalidInput(WizardError):
    pass


class PrivilegeDenied(WizardError):
    pass


# Command execution


class SpawnFailed(WizardError):
    status = 2

    def __init__(self, command: str, reason: str) -> None:
        super().__init__(f"Failed to execute: {command}: {reason}")
        self.command = command
        self.reason = reason


class NonZeroExit(WizardError):
    def __init__(self, command: str, stdout: str, stderr: str, exit_info: object = None) -> None:
        super().__init__(
            f"Command `{command}` failed ({exit_info}):\nstdout: {stdout.strip()}\nstderr: {stderr.strip()}"
        )
        self.command = command
        self.stdout = stdout
        self.stderr = stderr
        self.exit_info = exit_info


class StdinWriteFailed(WizardError):
    def __init__(self, command: str, reason: str) -> None:
        super().__init__(f"Failed to write to `{command}` stdin: {reason}")
        self.command = command
        self.reason = reason


# Identity resolution


class MissingVariable(WizardError):
    def __init__(self, name: str) -> None:
        super().__init__(f"setup cannot continue without the {name} environment variable")
        self.name = name


class InvalidHome(WizardError):
    def __init__(self, path: str) -> None:
        super().__init__(f"home directory does not exist: {path}")
        self.path = path


# File installation


class InvalidSourceName(WizardError):
    def __init__(self, path: str) -> None:
        super().__init__(f"could not determine filename from path: {path}")
        self.path = path


class SourceUnreadable(WizardError):
    status = 2

    def __init__(self, path: str, reason: Optional[str] = None) -> None:
        msg = f"failed to read source file '{path}'"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
        self.path = path


class DestinationWriteFailed(WizardError):
    def __init__(self, path: str, reason: Optional[str] = None) -> None:
        msg = f"failed to write '{path}'"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
        self.path = path
