"""Map application display names to Homebrew cask tokens."""

import re
import logging
from typing import Callable, Dict, Optional

# Set up logging for this module
logger = logging.getLogger(__name__)

_PLATFORM_QUALIFIER = re.compile(r'\s+(for|on)\s+Mac(\s+OS(\s+X)?)?\s*$', re.IGNORECASE)
_CLASSIC_SUFFIX = re.compile(r'\s+classic$', re.IGNORECASE)


def canonicalize(name: str) -> str:
    """Lowercase a name and replace spaces with hyphens"""
    return name.lower().replace(' ', '-')


def simplify_name(name: str) -> str:
    """Strip a trailing "for Mac" / "on Mac OS X" style qualifier"""
    return _PLATFORM_QUALIFIER.sub('', name)


class IdentityResolver:
    """Resolve display names to cask tokens using an existence check.

    The strategies are tried in order and the first token the catalog knows
    about wins:

    1. The display name canonicalized as-is ("Google Chrome" -> "google-chrome")
    2. The name without a platform qualifier ("Word for Mac" -> "word")
    3. A "Classic" edition mapped to its @classic variant ("App Classic" -> "app@classic")

    When nothing matches, the step 1 token is returned unchecked and the
    caller decides what a missing cask means.
    """

    def __init__(self, exists: Callable[[str], bool]):
        self._exists = exists
        self._resolved: Dict[str, str] = {}

    def _check(self, token: str) -> bool:
        """Run the existence check, treating any failure as "not found"."""
        try:
            return bool(self._exists(token))
        except Exception as e:
            logger.warning(f"Existence check for '{token}' failed: {e}")
            return False

    def _try_resolve(self, display_name: str) -> Optional[str]:
        direct = canonicalize(display_name)
        if self._check(direct):
            return direct

        simplified = canonicalize(simplify_name(display_name))
        if simplified != direct and self._check(simplified):
            logger.debug(f"Resolved {display_name} via simplified name {simplified}")
            return simplified

        if _CLASSIC_SUFFIX.search(display_name):
            base = _CLASSIC_SUFFIX.sub('', display_name)
            classic = f"{canonicalize(base)}@classic"
            if self._check(classic):
                logger.debug(f"Resolved {display_name} via classic variant {classic}")
                return classic

        return None

    def resolve(self, display_name: str) -> str:
        """Return the cask token for display_name.

        Results are memoized so a bundle is only looked up once per run.
        """
        if display_name in self._resolved:
            return self._resolved[display_name]

        token = self._try_resolve(display_name)
        if token is None:
            token = canonicalize(display_name)
            logger.debug(f"No cask found for {display_name}, falling back to {token}")

        self._resolved[display_name] = token
        return token

    __call__ = resolve
