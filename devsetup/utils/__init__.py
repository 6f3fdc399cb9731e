"""
Utility modules for the devsetup installer.
"""

from .logging import setup_root_logger
from .commands import CommandResult, run_command

__all__ = ["setup_root_logger", "CommandResult", "run_command"]
