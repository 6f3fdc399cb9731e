"""
Configuration package.
"""

from .settings import Settings, LoggingConfig, ReportConfig, InstallConfig

__all__ = ["Settings", "LoggingConfig", "ReportConfig", "InstallConfig"]
