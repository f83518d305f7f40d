"""
Package Queries

Boundary to the package manager: reverse-dependency lookup via pactree and
foreign package enumeration via pacman. The pipeline depends only on the
protocols, so tests can supply in-memory fakes.
"""

from __future__ import annotations

import logging
import subprocess
from typing import Protocol, Sequence

from .errors import CommandError, CommandExitError, CommandTimeoutError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60.0


class ReverseDependencyResolver(Protocol):
    """Finds packages that depend on a package."""

    def resolve(self, package: str) -> list[str]:
        """Return packages depending on ``package``, excluding itself."""
        ...


class ForeignPackageUniverseProvider(Protocol):
    """Enumerates installed packages not from the sync repositories."""

    def list_packages(self) -> set[str]:
        ...


def _run(command: Sequence[str], timeout: float) -> subprocess.CompletedProcess:
    """Run a query command, mapping spawn failures and timeouts to errors."""
    logger.debug(f"Running {' '.join(command)}")
    try:
        return subprocess.run(
            list(command),
            capture_output=True,
            text=True,
            check=False,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        raise CommandTimeoutError(command, timeout) from None
    except OSError as e:
        raise CommandError(command, str(e)) from e
    except UnicodeDecodeError as e:
        raise CommandError(command, f"undecodable output: {e}") from e


def _output_lines(stdout: str) -> list[str]:
    return [line.strip() for line in stdout.splitlines() if line.strip()]


class PactreeResolver:
    """Reverse dependencies from ``pactree -r -u``."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, executable: str = "pactree"):
        self.timeout = timeout
        self.executable = executable

    def resolve(self, package: str) -> list[str]:
        proc = _run([self.executable, "-r", "-u", package], self.timeout)

        if proc.returncode != 0:
            # Package not installed or removed
            logger.debug(f"{self.executable} found no package {package}")
            return []

        return [line for line in _output_lines(proc.stdout) if line != package]


class PacmanForeignProvider:
    """Foreign (AUR) packages from ``pacman -Qmq``."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, executable: str = "pacman"):
        self.timeout = timeout
        self.executable = executable

    def list_packages(self) -> set[str]:
        command = [self.executable, "-Qmq"]
        proc = _run(command, self.timeout)

        if proc.returncode != 0:
            # Exit 1 with no output means there are no foreign packages
            if proc.returncode == 1 and not proc.stdout:
                return set()
            raise CommandExitError(command, proc.returncode)

        return set(_output_lines(proc.stdout))
