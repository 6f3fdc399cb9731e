"""
Durable executable search path.

Install methods may register directories that should be searched for
executables in later sessions. The registered entries live in a plain text
file (one directory per line) and are re-read on every lookup, so an entry
added by one method is visible to the next probe without restarting.
"""

import logging
import os
import shutil
from pathlib import Path
from typing import List, Optional

from .errors import ConfigurationFailure


class DurableSearchPath:
    """Executable lookup over the process PATH plus persisted entries."""

    def __init__(self, path_file: Path, extra_dirs: Optional[List[Path]] = None):
        """
        Args:
            path_file: File holding persisted search-path entries
            extra_dirs: Well-known user binary directories always searched
        """
        self.logger = logging.getLogger(__name__)
        self.path_file = Path(path_file).expanduser()
        self.extra_dirs = [Path(d).expanduser() for d in (extra_dirs or [])]

    def persisted_entries(self) -> List[str]:
        """Read persisted entries from disk, every call."""
        if not self.path_file.exists():
            return []
        try:
            lines = self.path_file.read_text(encoding="utf-8").splitlines()
        except OSError as e:
            self.logger.warning(f"Cannot read search path file {self.path_file}: {e}")
            return []
        return [line.strip() for line in lines if line.strip() and not line.startswith("#")]

    def entries(self) -> List[str]:
        """Resolve the full, de-duplicated search path."""
        resolved: List[str] = []
        candidates = os.environ.get("PATH", "").split(os.pathsep)
        candidates += self.persisted_entries()
        candidates += [str(d) for d in self.extra_dirs]
        for entry in candidates:
            if entry and entry not in resolved:
                resolved.append(entry)
        return resolved

    def as_env_path(self) -> str:
        return os.pathsep.join(self.entries())

    def which(self, executable: str) -> Optional[str]:
        return shutil.which(executable, path=self.as_env_path())

    def add(self, directory: Path) -> bool:
        """
        Persist a directory in the search path.

        Returns:
            True if the entry was added, False if it was already present

        Raises:
            ConfigurationFailure: If the path file cannot be written
        """
        entry = str(Path(directory).expanduser())
        if entry in self.persisted_entries():
            return False
        try:
            self.path_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path_file, "a", encoding="utf-8") as f:
                f.write(entry + "\n")
        except OSError as e:
            raise ConfigurationFailure(f"Cannot update search path file {self.path_file}: {e}") from e
        self.logger.info(f"Added {entry} to persisted search path {self.path_file}")
        return True
