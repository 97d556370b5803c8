"""
Tests for constants.py - Split param table ordering and completeness checks.

The split param table is evaluated in order, so any token that is a
substring of another token must come after it.
"""

from android_artifacts.constants import (
    ABIS,
    UNSUPPORTED_ABIS,
    SCREEN_DENSITIES,
    SPLIT_PARAMS,
    UNIVERSAL_SPLIT_PARAM,
    SIGNING_SUFFIX_VARIANTS,
    BITRISE_SIGNED_SUFFIX,
    UNSIGNED_SUFFIX,
    APK_EXTENSION,
    AAB_EXTENSION,
)


class TestSplitParams:
    """Tests for the ordered SPLIT_PARAMS table."""

    def test_is_ordered_sequence(self):
        assert isinstance(SPLIT_PARAMS, tuple)

    def test_concatenates_groups_in_priority_order(self):
        assert SPLIT_PARAMS == ABIS + UNSUPPORTED_ABIS + SCREEN_DENSITIES

    def test_abis_come_first(self):
        assert SPLIT_PARAMS[0] == "armeabi-v7a"
        assert SPLIT_PARAMS.index("universal") < SPLIT_PARAMS.index("mips64")

    def test_no_duplicates(self):
        assert len(set(SPLIT_PARAMS)) == len(SPLIT_PARAMS)

    def test_tokens_are_lower_case(self):
        for param in SPLIT_PARAMS:
            assert param == param.lower()

    def test_longer_tokens_precede_their_substrings(self):
        for i, shorter in enumerate(SPLIT_PARAMS):
            for longer in SPLIT_PARAMS[i + 1:]:
                assert shorter not in longer, f"{shorter} is removed before {longer}"

    def test_density_order(self):
        assert SCREEN_DENSITIES.index("xxxhdpi") < SCREEN_DENSITIES.index("xxhdpi")
        assert SCREEN_DENSITIES.index("xxhdpi") < SCREEN_DENSITIES.index("xhdpi")
        assert SCREEN_DENSITIES.index("xhdpi") < SCREEN_DENSITIES.index("hdpi")

    def test_numeric_densities(self):
        for bucket in ("280", "360", "420", "480", "560"):
            assert bucket in SCREEN_DENSITIES

    def test_universal_is_an_abi(self):
        assert UNIVERSAL_SPLIT_PARAM == "universal"
        assert UNIVERSAL_SPLIT_PARAM in ABIS


class TestSigningSuffixes:
    """Tests for signing suffix constants."""

    def test_suffixes(self):
        assert BITRISE_SIGNED_SUFFIX == "-bitrise-signed"
        assert UNSIGNED_SUFFIX == "-unsigned"

    def test_variants_start_with_plain_spelling(self):
        assert SIGNING_SUFFIX_VARIANTS == ("", "-unsigned", "-bitrise-signed")


class TestExtensions:
    """Tests for build output extensions."""

    def test_extensions_include_dot(self):
        assert APK_EXTENSION == ".apk"
        assert AAB_EXTENSION == ".aab"
