"""Tests for SdkFeatureBand parsing, formatting and ordering."""

import pytest

from sdkmanifests.feature_band import SdkFeatureBand


class TestParse:
    @pytest.mark.parametrize(
        "version, expected",
        [
            ("6.0.100", "6.0.100"),
            ("6.0.205", "6.0.200"),
            ("7.0.399", "7.0.300"),
            ("6.0.100-preview.7.21379.14", "6.0.100-preview.7"),
            ("6.0.100-rc.2", "6.0.100-rc.2"),
            ("6.0.100-alpha", "6.0.100-alpha"),
            ("6.0.100-dev", "6.0.100"),
            ("6.0.100-ci", "6.0.100"),
            ("6.0.100-rtm.21522.1", "6.0.100"),
            ("6.0.201+abcdef", "6.0.200"),
            (" 8.0.100 ", "8.0.100"),
        ],
    )
    def test_band_string(self, version, expected):
        assert str(SdkFeatureBand.parse(version)) == expected

    @pytest.mark.parametrize("text", ["", "6.0", "tools", "6.0.x", "v6.0.100"])
    def test_invalid(self, text):
        with pytest.raises(ValueError, match="Invalid SDK version"):
            SdkFeatureBand.parse(text)

    def test_without_prerelease(self):
        band = SdkFeatureBand.parse("6.0.100-preview.7")
        assert band.prerelease == "preview.7"
        assert band.without_prerelease() == "6.0.100"
        assert SdkFeatureBand.parse("6.0.100").prerelease == ""


class TestOrdering:
    def test_numeric_components(self):
        assert SdkFeatureBand.parse("6.0.100") < SdkFeatureBand.parse("6.0.200")
        assert SdkFeatureBand.parse("5.0.400") < SdkFeatureBand.parse("6.0.100")
        assert SdkFeatureBand.parse("6.0.900") < SdkFeatureBand.parse("10.0.100")

    def test_prerelease_before_release(self):
        assert SdkFeatureBand.parse("6.0.100-rc.1") < SdkFeatureBand.parse("6.0.100")
        assert SdkFeatureBand.parse("6.0.100") > SdkFeatureBand.parse("6.0.100-rc.1")

    def test_prerelease_labels(self):
        preview2 = SdkFeatureBand.parse("6.0.100-preview.2")
        preview10 = SdkFeatureBand.parse("6.0.100-preview.10")
        rc1 = SdkFeatureBand.parse("6.0.100-rc.1")
        assert preview2 < preview10 < rc1
        # Shorter label list sorts first when it is a prefix
        assert SdkFeatureBand.parse("6.0.100-rc") < rc1
        # Numeric labels rank below alphanumeric ones
        assert SdkFeatureBand.parse("6.0.100-1") < SdkFeatureBand.parse("6.0.100-alpha")

    def test_equality_and_hash(self):
        a = SdkFeatureBand.parse("6.0.201")
        b = SdkFeatureBand.parse("6.0.299")
        assert a == b
        assert hash(a) == hash(b)
        assert a != SdkFeatureBand.parse("6.0.201-preview.1")
        assert a != "6.0.200"

    def test_max(self):
        bands = [SdkFeatureBand.parse(v) for v in ["6.0.100", "6.0.300-rc.1", "6.0.200"]]
        assert str(max(bands)) == "6.0.300-rc.1"
