"""Migrate command implementation."""

import logging
from typing import NamedTuple

from ..utils.ui import Colors, StatusIcons, SectionDivider, ProgressIndicator, progress_wrapper
from ..utils.prompt import ConsolePrompt
from ..core.detector import APPLICATIONS_DIR, scan, partition_managed
from ..core.manager import MacSystemController
from ..core.migrator import QUIT_GRACE_SECONDS, MigrationEngine
from ..core.ordering import prompt_for_order
from ..core.resolver import IdentityResolver
from ..providers.homebrew import HomebrewCatalog

# Set up logging for this module
logger = logging.getLogger(__name__)


class MigrationOptions(NamedTuple):
    """Settings for one migration run, built from the command line."""
    dry_run: bool = False
    order: bool = False
    verbose: bool = False
    applications_dir: str = APPLICATIONS_DIR
    quit_grace_seconds: float = QUIT_GRACE_SECONDS


def _print_names(header, names):
    print()
    print(header)
    for name in names:
        print(f" {StatusIcons.BULLET} {name}")


def print_summary(report, dry_run=False):
    """Print the end-of-run rollup"""
    print(SectionDivider.format_header("Summary", width=40))
    print(f"Process completed. {report.replaced_count} app(s) have been replaced by Homebrew management.")
    print(f"{Colors.DIM}Processed {report.total_processed} app(s), "
          f"skipped {len(report.skipped)}.{Colors.RESET}")

    if dry_run and report.dry_run_planned:
        _print_names(f"{Colors.BLUE}Dry run: the following apps would have been replaced:{Colors.RESET}",
                     report.dry_run_planned)

    if report.not_found:
        _print_names(f"{Colors.YELLOW}The following apps were not found in Homebrew's cask repository. "
                     f"Please review them manually:{Colors.RESET}", report.not_found)

    if report.conflicts:
        _print_names(f"{Colors.YELLOW}The following apps encountered installation conflicts and were not "
                     f"replaced. Please review them manually:{Colors.RESET}", report.conflicts)

    if report.failed_removals:
        _print_names(f"{Colors.YELLOW}The following apps could not be removed and were left in "
                     f"place:{Colors.RESET}", report.failed_removals)

    if report.errors:
        _print_names(f"{Colors.RED}The following apps hit unexpected errors:{Colors.RESET}",
                     report.errors)


def handle_migrate_command(options, catalog=None, system=None, prompt=None):
    """Scan, filter, optionally reorder, then migrate candidates one by one.

    Returns:
        The RunReport of the run
    """
    catalog = catalog or HomebrewCatalog()
    system = system or MacSystemController()
    prompt = prompt or ConsolePrompt()

    print()
    print(f"{Colors.BOLD}[*] Homebrew migration{Colors.RESET}")
    if options.dry_run:
        print(f"{Colors.BLUE}Dry run: no applications will be quit, removed or installed.{Colors.RESET}")

    candidates = progress_wrapper(f"Scanning {options.applications_dir} directory",
                                  scan, options.applications_dir)
    print(f"Found {len(candidates)} applications in {options.applications_dir}.")

    installed = progress_wrapper("Querying Homebrew for installed casks", catalog.list_installed)
    logger.info(f"{len(installed)} casks already installed through Homebrew")

    resolver = IdentityResolver(catalog.exists)
    with ProgressIndicator("Matching applications to casks") as progress:
        def resolve(display_name):
            progress.update(f"Matching {display_name}...")
            return resolver.resolve(display_name)

        unmanaged, managed = partition_managed(candidates, installed, resolve)

    for candidate, cask_name in managed:
        print(f"{Colors.DIM}Skipping {candidate.display_name}: already managed by Homebrew "
              f"as {cask_name}.{Colors.RESET}")
    print(f"Proceeding with {len(unmanaged)} apps not managed by Homebrew.")

    if options.order:
        unmanaged = prompt_for_order(unmanaged, prompt)

    engine = MigrationEngine(
        catalog,
        system,
        prompt,
        resolver=resolver,
        dry_run=options.dry_run,
        verbose=options.verbose,
        quit_grace_seconds=options.quit_grace_seconds,
    )
    report = engine.run(unmanaged)
    print_summary(report, dry_run=options.dry_run)
    return report
