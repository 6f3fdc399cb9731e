#!/usr/bin/env python3
"""
Main entry point for devsetup - profile-driven developer tooling installer
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Callable, List, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

# Load environment variables from .env file
load_dotenv()

from config.settings import Settings
from devsetup.catalog import PROFILE_IDS, build_component_catalog, build_profile_catalog
from devsetup.core.aggregator import EventLog, ReportWriter
from devsetup.core.catalog import ComponentCatalog
from devsetup.core.errors import CatalogError, UnknownProfileError, UserAbort
from devsetup.core.orchestrator import InstallationOrchestrator
from devsetup.core.profiles import ProfileCatalog
from devsetup.core.search_path import DurableSearchPath
from devsetup.utils.logging import setup_root_logger

QUIT = "Quit"

logger = logging.getLogger(__name__)


def parse_arguments(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="devsetup",
        description="Install developer and data tooling for a selected profile"
    )
    
    parser.add_argument(
        "--profile",
        help=f"Profile to install: {', '.join(PROFILE_IDS + [QUIT])} (prompted when omitted)"
    )
    
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file (JSON format)"
    )
    
    parser.add_argument(
        "--force-reinstall",
        action="store_true",
        help="Run install methods even when a component is already present"
    )
    
    parser.add_argument(
        "-y", "--yes",
        action="store_true",
        help="Skip the confirmation prompt"
    )
    
    parser.add_argument(
        "--plan",
        action="store_true",
        help="Show which components the profile selects and exit without installing"
    )
    
    parser.add_argument(
        "--list-profiles",
        action="store_true",
        help="List profiles and what they imply, then exit"
    )
    
    parser.add_argument(
        "--report-path",
        type=Path,
        help="Report file (default: devsetup_install_report.log)"
    )
    
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)"
    )
    
    return parser.parse_args(argv)


def load_config(args) -> Settings:
    """Load configuration from file, environment and command line."""
    config_data = {}
    if args.config and args.config.exists():
        with open(args.config) as f:
            config_data = json.load(f)
    
    # Override with command line args
    if args.force_reinstall:
        config_data.setdefault("install", {})["force_reinstall"] = True
    if args.yes:
        config_data.setdefault("install", {})["assume_yes"] = True
    if args.report_path:
        config_data.setdefault("report", {})["report_path"] = str(args.report_path)
    if args.log_level:
        config_data.setdefault("logging", {})["level"] = args.log_level
    
    return Settings(**config_data)


def build_catalogs(settings: Settings):
    """Build the profile catalog, search path and component catalog."""
    profiles = build_profile_catalog()
    search_path = DurableSearchPath(
        settings.install.path_file,
        extra_dirs=settings.install.extra_bin_dirs
    )
    catalog = build_component_catalog(
        profiles,
        search_path,
        python_executable=settings.install.python_executable,
        conda_executable=settings.install.conda_executable,
        use_sudo=settings.install.use_sudo,
        pip_extra_args=settings.install.pip_extra_args
    )
    return profiles, catalog


def prompt_for_profile(profiles: ProfileCatalog,
                       input_fn: Callable[[str], str] = input) -> str:
    """Ask for a profile interactively; Quit raises UserAbort."""
    options = profiles.ids + [QUIT]
    print("Select an installation profile:")
    for number, option in enumerate(options, start=1):
        description = profiles.get(option).description if option in profiles else "Exit without installing"
        print(f"  {number}. {option} - {description}")
    
    while True:
        try:
            answer = input_fn(f"Choice [1-{len(options)}]: ").strip()
        except EOFError:
            raise UserAbort("No profile selected") from None
        
        choice = None
        if answer.isdigit() and 1 <= int(answer) <= len(options):
            choice = options[int(answer) - 1]
        elif answer in options:
            choice = answer
        
        if choice == QUIT:
            raise UserAbort("Quit selected")
        if choice:
            return choice
        print(f"Invalid choice: {answer!r}")


def confirm(orchestrator: InstallationOrchestrator, profile: str,
            input_fn: Callable[[str], str] = input) -> None:
    """Show the planned components and ask to proceed; declining raises UserAbort."""
    selected = [c.id for c, reason in orchestrator.plan(profile) if reason is None]
    print(f"Profile {profile} selects {len(selected)} component(s): {', '.join(selected)}")
    try:
        answer = input_fn("Proceed? [y/N]: ").strip().lower()
    except EOFError:
        answer = ""
    if answer not in ("y", "yes"):
        raise UserAbort("Installation not confirmed")


def print_profiles(profiles: ProfileCatalog) -> None:
    for profile in profiles:
        implies = ", ".join(sorted(profile.implies)) or "-"
        reachable = ", ".join(sorted(profiles.reachable(profile.id)))
        print(f"{profile.id}: {profile.description}")
        print(f"    implies: {implies}")
        print(f"    includes: {reachable}")


def print_plan(orchestrator: InstallationOrchestrator, profile: str) -> None:
    for component, reason in orchestrator.plan(profile):
        flags = "".join([
            " [critical]" if component.critical else "",
            " [halts]" if component.halt_on_failure else "",
        ])
        status = "install" if reason is None else f"skip ({reason.value})"
        methods = " -> ".join(component.method_names) or "none"
        print(f"{component.id:<20} {status:<22} methods: {methods}{flags}")


def run_installation(settings: Settings, catalog: ComponentCatalog, profile: str) -> int:
    """Run the orchestrator with the report streamed to disk."""
    events = EventLog(settings.report.report_path)
    report_writer = ReportWriter(settings.report.summary_json_path)
    orchestrator = InstallationOrchestrator(
        catalog, events, force_reinstall=settings.install.force_reinstall
    )
    
    try:
        state = orchestrator.run(profile)
        summary = report_writer.finalize(state, events)
    finally:
        events.close()
    
    if summary:
        print(summary)
    logger.info(f"Report written to {settings.report.report_path}")
    return state.exit_code


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_arguments(argv)
    
    try:
        settings = load_config(args)
    except (ValidationError, ValueError, OSError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1
    
    setup_root_logger(
        settings.logging.file_path,
        settings.logging.level,
        format_string=settings.logging.format,
        max_file_size_mb=settings.logging.max_file_size_mb,
        backup_count=settings.logging.backup_count
    )
    logger.info("Starting devsetup")
    logger.debug(f"Arguments: {vars(args)}")
    
    try:
        profiles, catalog = build_catalogs(settings)
        
        if args.list_profiles:
            print_profiles(profiles)
            return 0
        
        if args.profile == QUIT:
            raise UserAbort("Quit selected")
        profile = args.profile or prompt_for_profile(profiles)
        profiles.require(profile)
        
        orchestrator = InstallationOrchestrator(catalog, EventLog())
        if args.plan:
            print_plan(orchestrator, profile)
            return 0
        
        if not settings.install.assume_yes:
            confirm(orchestrator, profile)
        
        return run_installation(settings, catalog, profile)
    
    except UserAbort as e:
        logger.info(f"Aborted by user: {e}")
        return 1
    except (UnknownProfileError, CatalogError) as e:
        logger.error(str(e))
        return 1
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        return 1


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
