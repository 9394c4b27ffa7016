"""Tests for homebrewme.core.version."""
import pytest

from homebrewme.core.version import (
    UNKNOWN_VERSION,
    VersionComparison,
    compare,
    is_unknown,
    normalize_version,
)


class TestNormalizeVersion:

    def test_simple(self):
        assert normalize_version("1.2.3") == [1, 2, 3]

    def test_suffix_is_stripped_per_component(self):
        assert normalize_version("2.3-beta") == [2, 3]

    def test_component_without_digits_is_zero(self):
        assert normalize_version("1.x.4") == [1, 0, 4]

    def test_single_number(self):
        assert normalize_version("42") == [42]


class TestIsUnknown:

    @pytest.mark.parametrize("value", [None, "", "   ", "unknown", "Unknown", "UNKNOWN"])
    def test_unknown_values(self, value):
        assert is_unknown(value)

    def test_real_version(self):
        assert not is_unknown("1.0")


class TestCompare:

    def test_same(self):
        assert compare("1.2.3", "1.2.3") is VersionComparison.SAME

    def test_padding_makes_equal(self):
        assert compare("1.2", "1.2.0") is VersionComparison.SAME

    def test_mismatched_segment_counts(self):
        assert compare("1.2", "1.2.0.1") is VersionComparison.OLDER

    def test_major_difference(self):
        assert compare("2.0", "1.9.9") is VersionComparison.NEWER

    def test_numeric_not_lexical(self):
        assert compare("1.10", "1.9") is VersionComparison.NEWER

    def test_beta_suffix(self):
        assert compare("2.3-beta", "2.3") is VersionComparison.SAME
        assert compare("2.3-beta", "2.4") is VersionComparison.OLDER

    def test_unknown_either_side(self):
        assert compare("1.0", "unknown") is VersionComparison.UNKNOWN
        assert compare(UNKNOWN_VERSION, "1.0") is VersionComparison.UNKNOWN
        assert compare(None, None) is VersionComparison.UNKNOWN

    @pytest.mark.parametrize("version", ["1", "1.0", "10.15.7", "2024.1.3", "3.1-rc2"])
    def test_reflexive(self, version):
        assert compare(version, version) is VersionComparison.SAME

    @pytest.mark.parametrize("a, b", [
        ("2.0", "1.9.9"),
        ("1.0.1", "1.0"),
        ("10.0", "9.99"),
        ("1.2.0.1", "1.2"),
    ])
    def test_antisymmetric(self, a, b):
        assert compare(a, b) is VersionComparison.NEWER
        assert compare(b, a) is VersionComparison.OLDER
