"""Utilities for extracting metadata from macOS applications."""

import os
import plistlib
import subprocess
import logging
from xml.parsers.expat import ExpatError
from typing import Optional

from ..core.version import UNKNOWN_VERSION

# Set up logging for this module
logger = logging.getLogger(__name__)

APP_SUFFIX = ".app"
VERSION_KEY = "CFBundleShortVersionString"


def get_app_name(app_path: str) -> str:
    """Return the display name of a bundle ("/Applications/Foo.app" -> "Foo")"""
    name = os.path.basename(app_path.rstrip('/'))
    if name.endswith(APP_SUFFIX):
        name = name[:-len(APP_SUFFIX)]
    return name


def _read_plist_key(plist_path: str, key: str) -> Optional[str]:
    """Read a key straight from an Info.plist (XML or binary)."""
    try:
        with open(plist_path, 'rb') as f:
            data = plistlib.load(f)
    except (OSError, ValueError, ExpatError) as e:
        logger.debug(f"Could not parse {plist_path}: {e}")
        return None

    value = data.get(key) if isinstance(data, dict) else None
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _defaults_read(plist_path: str, key: str) -> Optional[str]:
    """Ask `defaults` for a key, which copes with plists plistlib rejects."""
    # defaults wants the path without the .plist extension
    domain = plist_path[:-len('.plist')] if plist_path.endswith('.plist') else plist_path
    try:
        result = subprocess.run(
            ['defaults', 'read', domain, key],
            capture_output=True,
            text=True,
            timeout=5
        )
    except subprocess.TimeoutExpired:
        logger.warning(f"Timeout while reading {key} from {plist_path}")
        return None
    except (subprocess.SubprocessError, OSError) as e:
        logger.debug(f"defaults read failed for {plist_path}: {e}")
        return None

    if result.returncode == 0 and result.stdout.strip():
        return result.stdout.strip()
    return None


def get_app_version(app_path: str) -> str:
    """Extract the short version string from a macOS application.

    Args:
        app_path: Path to the .app directory

    Returns:
        Version string, or "unknown" if it cannot be read
    """
    if not app_path or not os.path.isdir(app_path):
        return UNKNOWN_VERSION

    info_plist_path = os.path.join(app_path, 'Contents', 'Info.plist')
    if not os.path.exists(info_plist_path):
        logger.debug(f"No Info.plist in {app_path}")
        return UNKNOWN_VERSION

    version = _read_plist_key(info_plist_path, VERSION_KEY)
    if version is None:
        version = _defaults_read(info_plist_path, VERSION_KEY)

    return version or UNKNOWN_VERSION
