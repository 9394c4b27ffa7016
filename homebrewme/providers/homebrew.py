"""Homebrew cask catalog operations."""

import json
import subprocess
import logging
from abc import ABC, abstractmethod
from typing import Dict, NamedTuple, Optional, Set

from ..core.version import UNKNOWN_VERSION, is_unknown
from ..utils.ui import Colors

# Set up logging for this module
logger = logging.getLogger(__name__)

MAX_CASK_NAME_LENGTH = 100
# Checked in order; the first usable string wins
VERSION_FIELDS = ("bundle_short_version", "version")


class CatalogEntry(NamedTuple):
    """A cask as seen by the catalog."""
    canonical_name: str
    available_version: str
    exists: bool


def check_tool_installed(tool):
    """Check if a command line tool is available on PATH"""
    try:
        result = subprocess.run(["which", tool], check=True, capture_output=True, text=True)
        logger.debug(f"{tool} found at: {result.stdout.strip()}")
        return True
    except subprocess.CalledProcessError:
        logger.info(f"{tool} is not installed or not in PATH")
        return False
    except FileNotFoundError:
        logger.error(f"'which' command not found - unable to check for {tool}")
        return False


def parse_cask_version(payload) -> str:
    """Extract the available version from `brew info --cask --json=v2` output.

    brew occasionally emits raw control characters inside description
    strings, so the JSON is parsed with strict=False. Anything that does not
    look like a usable version degrades to the unknown sentinel.

    Args:
        payload: Raw JSON text

    Returns:
        bundle_short_version if it is a usable string, else version, else "unknown"
    """
    try:
        data = json.loads(payload, strict=False)
        cask = data["casks"][0]
        fields = [cask.get(key) for key in VERSION_FIELDS]
    except (ValueError, KeyError, IndexError, TypeError, AttributeError) as e:
        logger.debug(f"Could not parse cask metadata: {e}")
        return UNKNOWN_VERSION

    for version in fields:
        if isinstance(version, str) and not is_unknown(version) and version != "null":
            return version.strip()
    return UNKNOWN_VERSION


def _valid_cask_name(cask_name):
    return bool(cask_name) and isinstance(cask_name, str) and len(cask_name) <= MAX_CASK_NAME_LENGTH


class CatalogClient(ABC):
    """Interface to a package catalog that can install casks by name."""

    @abstractmethod
    def exists(self, canonical_name: str) -> bool:
        """Return True if the catalog has an entry with this name."""

    @abstractmethod
    def fetch_metadata(self, canonical_name: str) -> CatalogEntry:
        """Return the catalog entry, with an unknown version on any failure."""

    @abstractmethod
    def list_installed(self) -> Set[str]:
        """Return the names of all entries currently managed by the catalog."""

    @abstractmethod
    def install(self, canonical_name: str) -> bool:
        """Install an entry, returning True on success."""

    def describe(self, canonical_name: str) -> str:
        """Human-readable details for an entry."""
        return ""


class HomebrewCatalog(CatalogClient):
    """Catalog client backed by the brew command line tool."""

    def __init__(self, brew="brew", timeout=60):
        self.brew = brew
        self.timeout = timeout
        # JSON payloads from `brew info`, None for casks that do not exist
        self._info_cache: Dict[str, Optional[str]] = {}

    def _info_json(self, cask_name: str) -> Optional[str]:
        if cask_name in self._info_cache:
            return self._info_cache[cask_name]

        payload = None
        if _valid_cask_name(cask_name):
            try:
                result = subprocess.run(
                    [self.brew, "info", "--cask", "--json=v2", cask_name],
                    capture_output=True, text=True, timeout=self.timeout
                )
                if result.returncode == 0:
                    payload = result.stdout
                else:
                    logger.debug(f"brew info failed for '{cask_name}': {result.stderr.strip()}")
            except subprocess.TimeoutExpired:
                logger.warning(f"Timeout getting info for cask '{cask_name}'")
            except (subprocess.SubprocessError, OSError) as e:
                logger.warning(f"Error getting info for cask '{cask_name}': {e}")
        else:
            logger.warning(f"Invalid cask name: {cask_name!r}")

        self._info_cache[cask_name] = payload
        return payload

    def exists(self, canonical_name: str) -> bool:
        return self._info_json(canonical_name) is not None

    def fetch_metadata(self, canonical_name: str) -> CatalogEntry:
        payload = self._info_json(canonical_name)
        if payload is None:
            return CatalogEntry(canonical_name, UNKNOWN_VERSION, False)
        return CatalogEntry(canonical_name, parse_cask_version(payload), True)

    def list_installed(self) -> Set[str]:
        try:
            result = subprocess.run(
                [self.brew, "list", "--cask", "-1"],
                capture_output=True, text=True, timeout=self.timeout
            )
        except (subprocess.SubprocessError, OSError) as e:
            logger.warning(f"Could not list installed casks: {e}")
            return set()

        if result.returncode != 0:
            logger.warning(f"brew list --cask failed: {result.stderr.strip()}")
            return set()

        return set(line.strip() for line in result.stdout.splitlines() if line.strip())

    def describe(self, canonical_name: str) -> str:
        if not _valid_cask_name(canonical_name):
            return ""
        try:
            result = subprocess.run(
                [self.brew, "info", "--cask", canonical_name],
                capture_output=True, text=True, timeout=self.timeout
            )
        except (subprocess.SubprocessError, OSError) as e:
            logger.debug(f"Could not describe cask '{canonical_name}': {e}")
            return ""
        return result.stdout.strip() if result.returncode == 0 else ""

    def install(self, canonical_name: str) -> bool:
        if not _valid_cask_name(canonical_name):
            logger.error(f"Refusing to install invalid cask name: {canonical_name!r}")
            return False

        # Stream brew's output so the operator sees download progress
        try:
            process = subprocess.Popen([self.brew, "install", "--cask", canonical_name],
                                       stdout=subprocess.PIPE,
                                       stderr=subprocess.STDOUT,
                                       universal_newlines=True)
            for line in process.stdout:
                print(f"{Colors.DIM}  {line.rstrip()}{Colors.RESET}")
            return_code = process.wait()
        except (subprocess.SubprocessError, OSError) as e:
            logger.error(f"brew install --cask {canonical_name} failed to run: {e}")
            return False

        if return_code != 0:
            logger.info(f"brew install --cask {canonical_name} exited with {return_code}")
            return False
        return True
