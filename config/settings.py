"""
Configuration settings for the devsetup installer.
"""

from typing import List, Optional
from pathlib import Path
from pydantic import BaseModel, Field, validator
from pydantic_settings import BaseSettings


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = Field(default="INFO", description="Logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s",
        description="Log format"
    )
    file_path: Optional[Path] = Field(default=Path("logs/devsetup.log"))
    max_file_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(default=5, description="Number of log backups to keep")

    @validator('level')
    def validate_level(cls, v):
        if v.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR"):
            raise ValueError(f"Unsupported log level: {v}")
        return v.upper()


class ReportConfig(BaseModel):
    """Run report configuration. Paths are relative to the invocation directory."""
    report_path: Path = Field(
        default=Path("devsetup_install_report.log"),
        description="Append-only event log followed by the summary block"
    )
    summary_json_path: Optional[Path] = Field(
        default=Path("devsetup_summary.json"),
        description="Machine-readable summary of the last run"
    )


class InstallConfig(BaseModel):
    """Installation behaviour."""
    force_reinstall: bool = Field(default=False, description="Bypass the already-present check")
    assume_yes: bool = Field(default=False, description="Skip the confirmation prompt")
    use_sudo: bool = Field(default=True, description="Prefix system package commands with sudo")
    python_executable: str = Field(default="python3", description="Interpreter receiving pip installs")
    conda_executable: str = Field(default="conda", description="Conda (or mamba) executable")
    pip_extra_args: List[str] = Field(default_factory=list, description="Extra arguments for pip install")
    path_file: Path = Field(
        default=Path("~/.config/devsetup/path"),
        description="Persisted search-path entries"
    )
    extra_bin_dirs: List[Path] = Field(
        default_factory=lambda: [Path("~/.local/bin"), Path("~/.cargo/bin"), Path("~/miniconda3/bin")],
        description="User binary directories always searched by probes"
    )


class Settings(BaseSettings):
    """Main application settings."""
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    install: InstallConfig = Field(default_factory=InstallConfig)

    class Config:
        env_prefix = "DEVSETUP_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_nested_delimiter = "__"
        extra = "ignore"  # Ignore extra fields from environment
