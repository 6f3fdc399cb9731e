"""
Subprocess helper with consistent logging.
"""

import logging
import os
import shlex
import subprocess
from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    argv: List[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def tail(self, lines: int = 5) -> str:
        """Last lines of stderr (or stdout when stderr is empty)."""
        text = (self.stderr or self.stdout or "").strip()
        return "\n".join(text.splitlines()[-lines:])


def format_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def run_command(argv: Sequence[str],
                env: Optional[Mapping[str, str]] = None,
                cwd: Optional[str] = None) -> CommandResult:
    """
    Run a command to completion and capture its output.

    No timeout is applied; long-running installs block until they finish.

    Raises:
        FileNotFoundError: If the executable does not exist
    """
    argv_list = list(argv)
    logger.info(f"CMD {format_argv(argv_list)}")

    p = subprocess.run(
        argv_list,
        capture_output=True,
        text=True,
        cwd=cwd,
        env=dict(os.environ, **(env or {})),
    )

    if p.stdout:
        logger.debug(f"STDOUT {p.stdout.strip()}")
    if p.stderr:
        logger.debug(f"STDERR {p.stderr.strip()}")

    return CommandResult(argv=argv_list, returncode=p.returncode, stdout=p.stdout, stderr=p.stderr)
