"""Tests for homebrewme.core.resolver."""
from homebrewme.core.resolver import IdentityResolver, canonicalize, simplify_name


def resolver_for(*known):
    calls = []

    def exists(token):
        calls.append(token)
        return token in known

    return IdentityResolver(exists), calls


class TestHelpers:

    def test_canonicalize(self):
        assert canonicalize("Google Chrome") == "google-chrome"

    def test_simplify_for_mac(self):
        assert simplify_name("Microsoft Word for Mac") == "Microsoft Word"

    def test_simplify_on_mac_os_x(self):
        assert simplify_name("Thing on Mac OS X") == "Thing"

    def test_simplify_case_insensitive(self):
        assert simplify_name("Thing FOR mac os") == "Thing"

    def test_simplify_leaves_other_names(self):
        assert simplify_name("Macintosh Explorer") == "Macintosh Explorer"


class TestIdentityResolver:

    def test_direct_match(self):
        resolver, _ = resolver_for("google-chrome")
        assert resolver.resolve("Google Chrome") == "google-chrome"

    def test_simplified_form(self):
        resolver, _ = resolver_for("microsoft-word")
        assert resolver.resolve("Microsoft Word for Mac") == "microsoft-word"

    def test_simplified_missing_falls_back(self):
        resolver, _ = resolver_for()
        assert resolver.resolve("Microsoft Word for Mac") == "microsoft-word-for-mac"

    def test_simplified_not_checked_when_identical(self):
        resolver, calls = resolver_for()
        resolver.resolve("Slack")
        assert calls == ["slack"]

    def test_classic_variant(self):
        resolver, _ = resolver_for("app@classic")
        assert resolver.resolve("App Classic") == "app@classic"

    def test_classic_missing_falls_back(self):
        resolver, calls = resolver_for()
        assert resolver.resolve("App Classic") == "app-classic"
        assert calls == ["app-classic", "app@classic"]

    def test_direct_wins_over_classic(self):
        resolver, _ = resolver_for("app-classic", "app@classic")
        assert resolver.resolve("App Classic") == "app-classic"

    def test_failing_check_counts_as_missing(self):
        def exists(token):
            raise OSError("brew crashed")

        resolver = IdentityResolver(exists)
        assert resolver.resolve("Google Chrome") == "google-chrome"

    def test_results_are_memoized(self):
        resolver, calls = resolver_for("google-chrome")
        resolver.resolve("Google Chrome")
        resolver.resolve("Google Chrome")
        assert calls == ["google-chrome"]

    def test_callable(self):
        resolver, _ = resolver_for("zoom")
        assert resolver("Zoom") == "zoom"
