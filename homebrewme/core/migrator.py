"""Application migration orchestration."""

import time
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ..utils.ui import Colors, StatusIcons, SectionDivider
from .resolver import IdentityResolver
from .version import VersionComparison, compare

# Set up logging for this module
logger = logging.getLogger(__name__)

QUIT_GRACE_SECONDS = 2.0
DECISION_CHOICES = "[y/N/A(all yes)/F(all no)]"

_QUESTIONS = {
    VersionComparison.SAME: "Installed version matches Homebrew version. Reinstall via Homebrew?",
    VersionComparison.OLDER: "Version mismatch detected (installed is older). Replace with Homebrew version?",
    VersionComparison.NEWER: "Installed version is newer than Homebrew's. Replace with Homebrew version anyway?",
    VersionComparison.UNKNOWN: "Version comparison inconclusive. Replace with Homebrew version?",
}


class Decision(Enum):
    """Operator answer to a replacement prompt."""
    YES = "y"
    NO = "n"
    ALL_YES = "A"
    ALL_NO = "F"


def parse_decision(answer) -> Decision:
    """Map a typed answer to a Decision; anything unrecognised means no"""
    answer = (answer or "").strip()
    if answer in ("A", "a"):
        return Decision.ALL_YES
    if answer in ("F", "f"):
        return Decision.ALL_NO
    if answer in ("Y", "y"):
        return Decision.YES
    return Decision.NO


class Outcome(Enum):
    """Terminal state of one candidate."""
    REPLACED = "replaced"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    SKIPPED = "skipped"
    REMOVAL_FAILED = "removal_failed"
    DRY_RUN = "dry_run"


@dataclass
class RunReport:
    """Tally of a migration run."""
    total_processed: int = 0
    replaced_count: int = 0
    not_found: List[str] = field(default_factory=list)
    conflicts: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failed_removals: List[str] = field(default_factory=list)
    dry_run_planned: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


class MigrationEngine:
    """Replaces manually installed applications with their Homebrew casks.

    Candidates are processed one at a time. For each one the engine resolves
    the cask, compares versions, asks the operator (unless an earlier "all
    yes"/"all no" answer applies), quits the running app, removes the bundle
    and installs the cask. Failures are recorded in the RunReport and never
    stop the run.

    Removal and installation are not transactional: when the install fails
    after the bundle was removed, the app is recorded as a conflict and left
    uninstalled.
    """

    def __init__(self, catalog, system, prompt, resolver=None, dry_run=False,
                 verbose=False, quit_grace_seconds=QUIT_GRACE_SECONDS, sleep=time.sleep):
        self.catalog = catalog
        self.system = system
        self.prompt = prompt
        self.resolver = resolver or IdentityResolver(catalog.exists)
        self.dry_run = dry_run
        self.verbose = verbose
        self.quit_grace_seconds = quit_grace_seconds
        self._sleep = sleep
        self.sticky_decision: Optional[Decision] = None
        self.report = RunReport()

    def run(self, candidates) -> RunReport:
        """Process every candidate in order and return the report"""
        total = len(candidates)
        for i, candidate in enumerate(candidates, 1):
            print(SectionDivider.format_header(f"Processing ({i}/{total}): {candidate.display_name}"))
            self.report.total_processed += 1
            try:
                self.process(candidate)
            except Exception as e:
                logger.error(f"Unexpected error processing {candidate.display_name}: {e}")
                print(f"{Colors.RED}{StatusIcons.FAILED} Error while processing "
                      f"{candidate.display_name}: {e}{Colors.RESET}")
                self.report.errors.append(candidate.display_name)
            print(f"{Colors.DIM}Apps left: {total - i}{Colors.RESET}")
        return self.report

    def process(self, candidate) -> Outcome:
        """Take one candidate through resolve, compare, decide and replace"""
        name = candidate.display_name
        cask_name = self.resolver.resolve(name)

        if not self._exists(cask_name):
            print(f"{Colors.YELLOW}{name} (canonical: {cask_name}) is not in Homebrew's cask "
                  f"repository. Skipping...{Colors.RESET}")
            self.report.not_found.append(name)
            return Outcome.NOT_FOUND

        print(f"{name} is available in Homebrew as {Colors.BOLD}{cask_name}{Colors.RESET} "
              f"but is not managed by it.")

        entry = self.catalog.fetch_metadata(cask_name)
        comparison = compare(candidate.installed_version, entry.available_version)
        print(f"Installed version: {candidate.installed_version}")
        print(f"Homebrew version:  {entry.available_version}")
        logger.info(f"{name}: installed {candidate.installed_version} is {comparison.value} "
                    f"relative to {cask_name} {entry.available_version}")

        if self.verbose:
            self._show_details(cask_name)

        if self._decide(comparison) is Decision.NO:
            print(f"Skipping replacement for {name}.")
            self.report.skipped.append(name)
            return Outcome.SKIPPED

        if self.dry_run:
            print(f"{Colors.BLUE}Dry run: Would ask {name} to quit.{Colors.RESET}")
            print(f"{Colors.BLUE}Dry run: Would remove {candidate.bundle_path}.{Colors.RESET}")
            print(f"{Colors.BLUE}Dry run: Would install {cask_name} via Homebrew.{Colors.RESET}")
            self.report.dry_run_planned.append(name)
            return Outcome.DRY_RUN

        if not self._quit(name):
            print(f"Skipping replacement for {name}; it was left untouched.")
            self.report.skipped.append(name)
            return Outcome.SKIPPED

        if self.system.bundle_exists(candidate.bundle_path):
            print(f"Removing the manually installed version at {candidate.bundle_path}...")
            if not self.system.remove_bundle(candidate.bundle_path):
                print(f"{Colors.RED}{StatusIcons.FAILED} Could not remove {candidate.bundle_path}. "
                      f"Not installing {cask_name}.{Colors.RESET}")
                self.report.failed_removals.append(name)
                return Outcome.REMOVAL_FAILED
            print(f"{StatusIcons.SUCCESS} Removed {candidate.bundle_path}.")
        else:
            logger.debug(f"{candidate.bundle_path} already gone, nothing to remove")

        print(f"Installing {cask_name} via Homebrew...")
        if not self.catalog.install(cask_name):
            print(f"{Colors.RED}Error: Cask '{cask_name}' encountered an installation conflict or "
                  f"error. Skipping installation for {name}.{Colors.RESET}")
            self.report.conflicts.append(name)
            return Outcome.CONFLICT

        print(f"{Colors.GREEN}{StatusIcons.SUCCESS} {name} is now managed by Homebrew "
              f"as {cask_name}.{Colors.RESET}")
        self.report.replaced_count += 1
        return Outcome.REPLACED

    def _exists(self, cask_name):
        try:
            return self.catalog.exists(cask_name)
        except Exception as e:
            logger.warning(f"Existence check for '{cask_name}' failed: {e}")
            return False

    def _show_details(self, cask_name):
        details = self.catalog.describe(cask_name)
        if details:
            print(f"\n{Colors.BOLD}Brew info for {cask_name}:{Colors.RESET}")
            print(details)
            print(SectionDivider.format_rule(21))

    def _decide(self, comparison) -> Decision:
        """Return YES or NO, consulting the sticky decision before asking."""
        if self.sticky_decision is Decision.ALL_YES:
            print(f"{Colors.DIM}Applying earlier choice: replace all.{Colors.RESET}")
            return Decision.YES
        if self.sticky_decision is Decision.ALL_NO:
            print(f"{Colors.DIM}Applying earlier choice: skip all.{Colors.RESET}")
            return Decision.NO

        decision = self.prompt.ask_decision(f"{_QUESTIONS[comparison]} {DECISION_CHOICES}: ")
        if decision is Decision.ALL_YES:
            self.sticky_decision = Decision.ALL_YES
            return Decision.YES
        if decision is Decision.ALL_NO:
            self.sticky_decision = Decision.ALL_NO
            return Decision.NO
        return decision

    def _quit(self, name) -> bool:
        """Ask the app to quit; False means the operator chose to leave it alone."""
        print(f"Attempting to quit {name}...")
        self.system.quit_app(name)
        # Wait a bit to allow the app to quit gracefully
        self._sleep(self.quit_grace_seconds)

        if not self.system.is_app_running(name):
            return True

        print(f"{Colors.YELLOW}{StatusIcons.WARNING} {name} is still running.{Colors.RESET}")
        return self.prompt.confirm("Continue with removal anyway? [y/N]: ")
