"""Unit tests for version normalization."""

import pytest
from pubctl.core.errors import InvalidVersionError, UsageError
from pubctl.core.version import clean_version


class TestCleanVersion:
    """Tests for clean_version function."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("1.2.3", "1.2.3"),
            (" 1.2.3 ", "1.2.3"),
            ("v1.2.3", "1.2.3"),
            ("V0.1.0", "0.1.0"),
            ("1.2", "1.2.0"),
            ("v2.0", "2.0.0"),
            ("1.0.0-rc.1", "1.0.0-rc.1"),
            ("1.0.0+build.5", "1.0.0+build.5"),
            ("1.0.0-beta+exp.sha.5114f85", "1.0.0-beta+exp.sha.5114f85"),
        ],
    )
    def test_normalizes(self, raw: str, expected: str) -> None:
        """Valid versions are normalized to canonical SemVer."""
        assert clean_version(raw) == expected

    @pytest.mark.parametrize("raw", ["", "1", "abc", "1.2.3.4", "01.2.3", "1.2.x", "1.0.0-"])
    def test_rejects_invalid(self, raw: str) -> None:
        """Invalid versions raise InvalidVersionError."""
        with pytest.raises(InvalidVersionError, match="Invalid version"):
            clean_version(raw)

    def test_error_is_usage_error_with_hint(self) -> None:
        """Invalid versions are usage errors carrying a hint."""
        with pytest.raises(UsageError) as exc_info:
            clean_version("latest")

        assert exc_info.value.hint is not None
        assert "SemVer" in exc_info.value.hint


class TestVersionPatterns:
    """Tests for the version patterns used by clean_version."""

    @pytest.mark.parametrize("raw", ["1.2.3\n", "1.2\n"])
    def test_trailing_newline_does_not_match(self, raw: str) -> None:
        """A trailing newline is not accepted by the version patterns."""
        from pubctl.core.version import _SEMVER_RE, _SHORT_RE

        assert _SEMVER_RE.fullmatch(raw) is None
        assert _SHORT_RE.fullmatch(raw) is None
