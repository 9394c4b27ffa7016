"""Application lifecycle management functionality."""

import os
import subprocess
import logging
from abc import ABC, abstractmethod

from ..utils.ui import Colors, StatusIcons

# Set up logging for this module
logger = logging.getLogger(__name__)


def applescript_string(value):
    """Quote a value as an AppleScript string literal"""
    escaped = value.replace('\\', '\\\\').replace('"', '\\"')
    return f'"{escaped}"'


def is_safe_bundle_path(app_path):
    """Only absolute, non-traversing paths to .app bundles may be deleted"""
    if not app_path or not isinstance(app_path, str):
        return False
    if not os.path.isabs(app_path) or '..' in app_path.split(os.sep):
        return False
    return os.path.basename(app_path.rstrip(os.sep)).endswith('.app')


class SystemController(ABC):
    """OS operations the migration needs: liveness, quitting and deletion."""

    @abstractmethod
    def is_app_running(self, app_name: str) -> bool:
        """Return True if an application with this name is running."""

    @abstractmethod
    def quit_app(self, app_name: str) -> None:
        """Politely ask an application to quit, without waiting."""

    @abstractmethod
    def bundle_exists(self, app_path: str) -> bool:
        """Return True if something is still present at app_path."""

    @abstractmethod
    def remove_bundle(self, app_path: str) -> bool:
        """Delete an application bundle, returning True once it is gone."""


class MacSystemController(SystemController):
    """SystemController backed by osascript, the filesystem and sudo."""

    def is_app_running(self, app_name):
        try:
            # Matches by application name, not by process name
            script = f'application {applescript_string(app_name)} is running'
            result = subprocess.run([
                'osascript',
                '-e',
                script
            ], capture_output=True, text=True, timeout=10)

            return result.returncode == 0 and result.stdout.strip() == "true"
        except (subprocess.SubprocessError, OSError) as e:
            # If there's an error, assume app is not running
            logger.debug(f"Could not determine if {app_name} is running: {e}")
            return False

    def quit_app(self, app_name):
        script = f'tell application {applescript_string(app_name)} to quit'
        try:
            subprocess.run(['osascript', '-e', script], capture_output=True, timeout=10)
        except (subprocess.SubprocessError, OSError) as e:
            logger.debug(f"Quit request for {app_name} failed: {e}")

    def bundle_exists(self, app_path):
        return os.path.lexists(app_path)

    def remove_bundle(self, app_path):
        if not is_safe_bundle_path(app_path):
            logger.error(f"Refusing to remove unexpected path: {app_path!r}")
            return False

        app_path = app_path.rstrip(os.sep)
        if os.path.islink(app_path):
            # Drop the link itself, never the tree it points to
            try:
                os.remove(app_path)
                return True
            except OSError as e:
                logger.error(f"Could not remove symlink {app_path}: {e}")
                return False

        parent = os.path.dirname(app_path)
        if not (os.access(app_path, os.W_OK) and os.access(parent, os.W_OK)):
            print(f"{StatusIcons.WARNING} No write permission for {app_path}. Using sudo removal.")
            return self._privileged_remove(app_path)

        print(f"Attempting to remove {app_path} file-by-file...")
        failed_entry = self._remove_tree(app_path)
        if failed_entry is None:
            return True

        print(f"{Colors.YELLOW}Failed to remove '{failed_entry}'. "
              f"Switching to sudo removal for the entire directory.{Colors.RESET}")
        return self._privileged_remove(app_path)

    def _remove_tree(self, app_path):
        """Delete a bundle bottom-up, returning the first entry that could not be removed."""
        walk_errors = []
        for root, dirs, files in os.walk(app_path, topdown=False, onerror=walk_errors.append):
            for name in files:
                entry = os.path.join(root, name)
                try:
                    os.remove(entry)
                except OSError as e:
                    logger.debug(f"Could not remove {entry}: {e}")
                    return entry
            for name in dirs:
                entry = os.path.join(root, name)
                try:
                    # Symlinked directories are listed as dirs but removed as files
                    if os.path.islink(entry):
                        os.remove(entry)
                    else:
                        os.rmdir(entry)
                except OSError as e:
                    logger.debug(f"Could not remove {entry}: {e}")
                    return entry

        if walk_errors:
            return walk_errors[0].filename or app_path

        try:
            os.rmdir(app_path)
        except OSError as e:
            logger.debug(f"Could not remove {app_path}: {e}")
            return app_path
        return None

    def _privileged_remove(self, app_path):
        try:
            result = subprocess.run(['sudo', 'rm', '-rf', app_path])
        except (subprocess.SubprocessError, OSError) as e:
            logger.error(f"sudo removal of {app_path} could not run: {e}")
            return False

        if result.returncode != 0 or os.path.exists(app_path):
            logger.error(f"sudo removal failed for {app_path}")
            return False
        return True
