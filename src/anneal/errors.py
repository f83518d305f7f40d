"""
Errors

Exception hierarchy for the rebuild-trigger core. Version and override
parsing never raise; these cover collaborator and configuration failures.
"""

from __future__ import annotations

from typing import Optional, Sequence


class AnnealError(Exception):
    """Base class for all anneal errors."""


class CommandError(AnnealError):
    """An external query command could not be run."""

    def __init__(self, command: Sequence[str], message: str):
        self.command = list(command)
        super().__init__(f"failed to run {self.command[0]}: {message}")


class CommandExitError(CommandError):
    """An external query command exited with an unexpected code."""

    def __init__(self, command: Sequence[str], returncode: int):
        self.returncode = returncode
        super().__init__(command, f"exited with code {returncode}")


class CommandTimeoutError(CommandError):
    """An external query command did not finish in time."""

    def __init__(self, command: Sequence[str], timeout: float):
        self.timeout = timeout
        super().__init__(command, f"timed out after {timeout}s")


class ConfigError(AnnealError):
    """Configuration file could not be read or is invalid."""

    def __init__(self, message: str, key: Optional[str] = None):
        self.key = key
        if key:
            message = f"{key}: {message}"
        super().__init__(message)
