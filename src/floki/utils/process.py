"""Process runner used for docker and user commands."""

import logging
import shlex
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExitStatus:
    """How a process exited.

    Negative return codes mean the process was killed by a signal.
    """
    returncode: int

    @property
    def success(self) -> bool:
        return self.returncode == 0

    @property
    def signal(self) -> Optional[int]:
        return -self.returncode if self.returncode < 0 else None

    def __str__(self) -> str:
        if self.signal is not None:
            return f"terminated by signal {self.signal}"
        return f"exit code {self.returncode}"


class ProcessRunner(ABC):
    """Spawns a process and waits for it to exit."""

    @abstractmethod
    def run(
        self,
        cmd: List[str],
        cwd: Optional[Path] = None,
        quiet: bool = False,
    ) -> ExitStatus:
        """Run a command to completion.

        Raises OSError if the process cannot be started.
        """
        pass


class SubprocessRunner(ProcessRunner):
    """Runs commands with the subprocess module, inheriting stdio."""

    def run(
        self,
        cmd: List[str],
        cwd: Optional[Path] = None,
        quiet: bool = False,
    ) -> ExitStatus:
        """Run a command, blocking until it exits."""
        logger.debug(f"Running command: {shlex.join(cmd)}")

        devnull = subprocess.DEVNULL if quiet else None
        process = subprocess.Popen(
            cmd,
            cwd=cwd,
            stdin=devnull,
            stdout=devnull,
            stderr=devnull,
        )
        returncode = process.wait()

        logger.debug(f"Command {cmd[0]} exited with {returncode}")
        return ExitStatus(returncode)
