"""
Concrete install methods and probes.

Every method shells out through ``run_command`` with the durable search
path exported as PATH, so tools registered by earlier methods are usable
by later ones.
"""

import logging
import os
import re
from pathlib import Path
from typing import List, Optional, Sequence

from ..models.component import AttemptOutcome, Method, Probe, ProbeResult
from ..utils.commands import format_argv, run_command
from .errors import NotFoundError
from .search_path import DurableSearchPath

VERSION_PATTERN = r"(\d+(?:\.\d+)+)"


def _sudo_prefix(use_sudo: bool) -> List[str]:
    if use_sudo and hasattr(os, "geteuid") and os.geteuid() != 0:
        return ["sudo"]
    return []


class CommandMethod(Method):
    """Run one or more commands in sequence; stop at the first failure."""

    def __init__(self, name: str, commands: Sequence[Sequence[str]],
                 search_path: DurableSearchPath,
                 requires: Optional[str] = None):
        """
        Args:
            name: Method name shown in the report
            commands: Commands to run in order
            search_path: Search path used to locate executables
            requires: Executable that must exist before anything runs
                (defaults to the first command's executable)
        """
        if not commands:
            raise ValueError(f"Method {name} has no commands")
        self.logger = logging.getLogger(__name__)
        self.name = name
        self.commands = [list(c) for c in commands]
        self.search_path = search_path
        self.requires = requires or self._executable(self.commands[0])

    @staticmethod
    def _executable(argv: List[str]) -> str:
        # Skip privilege wrappers to find the real prerequisite
        for arg in argv:
            if arg != "sudo":
                return arg
        return argv[0]

    def attempt(self) -> AttemptOutcome:
        if not self.search_path.which(self.requires):
            raise NotFoundError(f"{self.requires} not found on search path")

        env = {"PATH": self.search_path.as_env_path()}
        for argv in self.commands:
            try:
                result = run_command(argv, env=env)
            except FileNotFoundError as e:
                raise NotFoundError(f"{argv[0]} not found: {e}") from e
            if not result.ok:
                return AttemptOutcome.failed(
                    f"{format_argv(argv)} exited with {result.returncode}: {result.tail()}"
                )
        return AttemptOutcome.ok(f"{len(self.commands)} command(s) completed")


class RegisterSearchPathMethod(Method):
    """Wrap a method and persist extra search-path directories once it reports success."""

    def __init__(self, inner: Method, directories: Sequence[Path], search_path: DurableSearchPath):
        self.inner = inner
        self.name = inner.name
        self.directories = [Path(d) for d in directories]
        self.search_path = search_path

    def attempt(self) -> AttemptOutcome:
        outcome = self.inner.attempt()
        if not outcome.success:
            return outcome
        added = [str(d) for d in self.directories if self.search_path.add(d)]
        if added:
            return AttemptOutcome.ok(f"{outcome.message}; search path += {', '.join(added)}")
        return outcome


class ExecutableProbe(Probe):
    """Present when an executable resolves on the durable search path and runs."""

    def __init__(self, executable: str, search_path: DurableSearchPath,
                 version_args: Sequence[str] = ("--version",),
                 version_pattern: str = VERSION_PATTERN):
        self.executable = executable
        self.search_path = search_path
        self.version_args = list(version_args)
        self.version_pattern = re.compile(version_pattern)

    def describe(self) -> str:
        return f"executable:{self.executable}"

    def check(self) -> ProbeResult:
        # Resolve against the persisted entries on every call
        resolved = self.search_path.which(self.executable)
        if not resolved:
            return ProbeResult(present=False)
        try:
            result = run_command([resolved] + self.version_args,
                                 env={"PATH": self.search_path.as_env_path()})
        except OSError:
            return ProbeResult(present=False)
        if not result.ok:
            return ProbeResult(present=False)
        match = self.version_pattern.search(result.stdout + result.stderr)
        return ProbeResult(present=True, version=match.group(1) if match else None)


class PythonPackageProbe(Probe):
    """Present when a distribution is installed for the target interpreter."""

    def __init__(self, distribution: str, python_executable: str, search_path: DurableSearchPath):
        self.distribution = distribution
        self.python_executable = python_executable
        self.search_path = search_path

    def describe(self) -> str:
        return f"python-package:{self.distribution}"

    def check(self) -> ProbeResult:
        python = self.search_path.which(self.python_executable)
        if not python:
            return ProbeResult(present=False)
        # A fresh interpreter sees packages installed after this process started
        code = (
            "import importlib.metadata as m, sys\n"
            "print(m.version(sys.argv[1]))"
        )
        try:
            result = run_command([python, "-c", code, self.distribution])
        except OSError:
            return ProbeResult(present=False)
        if not result.ok:
            return ProbeResult(present=False)
        return ProbeResult(present=True, version=result.stdout.strip() or None)


def apt_install(packages: Sequence[str], search_path: DurableSearchPath,
                use_sudo: bool = True) -> CommandMethod:
    sudo = _sudo_prefix(use_sudo)
    return CommandMethod(
        name="apt",
        commands=[
            sudo + ["apt-get", "update"],
            sudo + ["apt-get", "install", "-y"] + list(packages),
        ],
        search_path=search_path,
        requires="apt-get",
    )


def pip_install(packages: Sequence[str], search_path: DurableSearchPath,
                python_executable: str = "python3",
                extra_args: Sequence[str] = (),
                user: bool = True,
                name: str = "pip") -> Method:
    argv = [python_executable, "-m", "pip", "install", "--upgrade"]
    if user:
        argv.append("--user")
    argv += list(extra_args) + list(packages)
    method = CommandMethod(name=name, commands=[argv], search_path=search_path)
    if user:
        # Console scripts of --user installs land here
        return RegisterSearchPathMethod(method, [Path("~/.local/bin")], search_path)
    return method


def conda_install(packages: Sequence[str], search_path: DurableSearchPath,
                  conda_executable: str = "conda",
                  channel: Optional[str] = None) -> CommandMethod:
    argv = [conda_executable, "install", "-y"]
    if channel:
        argv += ["-c", channel]
    argv += list(packages)
    return CommandMethod(name="conda", commands=[argv], search_path=search_path)


__all__ = [
    "CommandMethod",
    "RegisterSearchPathMethod",
    "ExecutableProbe",
    "PythonPackageProbe",
    "apt_install",
    "pip_install",
    "conda_install",
]
