"""Application discovery and Homebrew-managed filtering."""

import os
import logging
from typing import Callable, Iterable, List, NamedTuple, Set, Tuple

from ..utils.app_metadata import APP_SUFFIX, get_app_name, get_app_version

# Set up logging for this module
logger = logging.getLogger(__name__)

APPLICATIONS_DIR = "/Applications"


class ApplicationCandidate(NamedTuple):
    """An application bundle found during a scan."""
    display_name: str
    bundle_path: str
    installed_version: str


def get_all_applications(applications_dir: str = APPLICATIONS_DIR) -> List[str]:
    """Get paths of all top-level .app bundles in applications_dir"""
    try:
        if not os.path.isdir(applications_dir):
            logger.error(f"{applications_dir} directory does not exist")
            return []

        apps = []
        for item in os.listdir(applications_dir):
            if item.endswith(APP_SUFFIX):
                app_path = os.path.join(applications_dir, item)
                # Real bundle directories only, never symlinks
                if os.path.isdir(app_path) and not os.path.islink(app_path):
                    apps.append(app_path)
                else:
                    logger.warning(f"Skipping {item} - not a valid application bundle")

        logger.info(f"Found {len(apps)} applications in {applications_dir}")
        return sorted(apps)
    except PermissionError:
        logger.error(f"Permission denied accessing {applications_dir} directory")
        return []
    except OSError as e:
        logger.error(f"OS error scanning {applications_dir} directory: {e}")
        return []


def scan(applications_dir: str = APPLICATIONS_DIR) -> List[ApplicationCandidate]:
    """Build a candidate for every bundle in applications_dir, in name order."""
    return [
        ApplicationCandidate(
            display_name=get_app_name(app_path),
            bundle_path=app_path,
            installed_version=get_app_version(app_path),
        )
        for app_path in get_all_applications(applications_dir)
    ]


def partition_managed(candidates: Iterable[ApplicationCandidate],
                      installed: Set[str],
                      resolve: Callable[[str], str]
                      ) -> Tuple[List[ApplicationCandidate], List[Tuple[ApplicationCandidate, str]]]:
    """
    Split candidates into those Homebrew does not manage yet and those it does.

    Args:
        candidates: Scanned applications, in processing order
        installed: Cask tokens currently installed through Homebrew
        resolve: Maps a display name to its cask token

    Returns:
        Tuple of (unmanaged candidates, [(managed candidate, cask token), ...]),
        both in the original order
    """
    unmanaged = []
    managed = []
    for candidate in candidates:
        cask_name = resolve(candidate.display_name)
        if cask_name in installed:
            managed.append((candidate, cask_name))
        else:
            unmanaged.append(candidate)
    return unmanaged, managed


def filter_managed(candidates, installed, resolve):
    """Return only the candidates whose cask is not already installed"""
    unmanaged, _ = partition_managed(candidates, installed, resolve)
    return unmanaged
