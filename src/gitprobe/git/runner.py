"""Git subprocess wrapper shared by the inspector and the analyzer."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Union

from gitprobe.git.errors import (
    CommandFailed,
    CommandTimedOut,
    ExecutionError,
    ExecutionUnavailable,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandOutput:
    """Captured stdout and exit status of one git invocation."""

    stdout: str
    exit_code: int

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


class CommandRunner:
    """Run git subcommands in a working directory.

    stdout and stderr are captured separately. A non-zero exit only raises
    when git also wrote something to stderr; otherwise the caller gets the
    exit code back and decides what "no result" means.
    """

    def __init__(self, binary: str = "git", timeout: Optional[float] = None) -> None:
        self.binary = binary
        # 0 / None both mean wait for the process indefinitely
        self.timeout = timeout or None

    def run(self, cwd: Union[str, Path], args: Sequence[str]) -> CommandOutput:
        command = [self.binary, *args]
        logger.debug("running %s in %s", " ".join(command), cwd)
        try:
            result = subprocess.run(
                command,
                cwd=cwd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as exc:
            # subprocess reports a missing cwd the same way as a missing binary
            if not Path(cwd).is_dir():
                raise ExecutionError(f"Working directory does not exist: {cwd}") from exc
            logger.debug("cannot start %s: %s", self.binary, exc)
            raise ExecutionUnavailable(self.binary) from exc
        except subprocess.TimeoutExpired as exc:
            raise CommandTimedOut(args, self.timeout) from exc

        if result.returncode != 0:
            logger.debug("%s exited with %d", " ".join(command), result.returncode)
            if result.stderr.strip():
                raise CommandFailed(args, result.stderr)
        return CommandOutput(stdout=result.stdout, exit_code=result.returncode)
