"""External process invocation.

Every external tool (ffmpeg, ffprobe, node) goes through a ProcessRunner
so tests can substitute a fake without spawning binaries.
"""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessResult:
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class ProcessRunner(Protocol):
    def run(
        self,
        executable: str,
        args: list[str],
        cwd: str | Path | None = None,
        timeout: float | None = None,
    ) -> ProcessResult:
        """Run executable with args and wait for it to exit.

        Raises OSError if the executable cannot be launched and
        subprocess.TimeoutExpired if it outlives timeout.
        """


class SubprocessRunner:
    """ProcessRunner backed by subprocess.run (one OS process per call)."""

    def run(
        self,
        executable: str,
        args: list[str],
        cwd: str | Path | None = None,
        timeout: float | None = None,
    ) -> ProcessResult:
        cmd = [executable, *args]
        logger.debug("exec: %s", " ".join(cmd))
        completed = subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
        )
        return ProcessResult(completed.returncode, completed.stdout, completed.stderr)
