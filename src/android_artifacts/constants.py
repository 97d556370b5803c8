"""
Android build artifact naming constants.

This module contains the tokens used to decompose Gradle output file names
(APK/AAB) into module, product flavour, build type, signing state and
density/ABI split information.

Reference: https://developer.android.com/studio/build/build-variants
"""
from __future__ import annotations

# =============================================================================
# SNAPSHOT
# =============================================================================
SCHEMA_VERSION = "0.1"

# =============================================================================
# FILE EXTENSIONS
# =============================================================================
APK_EXTENSION = ".apk"
AAB_EXTENSION = ".aab"

# =============================================================================
# SIGNING SUFFIXES
# =============================================================================
# An artifact is either signed (no suffix), unsigned (`-unsigned`) or signed
# by an upstream signing step (`-bitrise-signed`).
# The bitrise-signed suffix is checked and stripped first.
BITRISE_SIGNED_SUFFIX = "-bitrise-signed"
UNSIGNED_SUFFIX = "-unsigned"

# Every spelling of the same artifact, used to deduplicate split APKs.
SIGNING_SUFFIX_VARIANTS = ("", UNSIGNED_SUFFIX, BITRISE_SIGNED_SUFFIX)

# =============================================================================
# SPLIT PARAMS
# =============================================================================
# The order of split params matters: they are removed from the flavour in
# this order. Removing `xhdpi` first from `app-xxxhdpi-debug.apk` would
# leave `app-xx-debug.apk`.
UNIVERSAL_SPLIT_PARAM = "universal"

# Reference: https://developer.android.com/ndk/guides/abis.html#sa
ABIS = ("armeabi-v7a", "arm64-v8a", "x86_64", "x86", UNIVERSAL_SPLIT_PARAM)
UNSUPPORTED_ABIS = ("mips64", "mips", "armeabi")

# Reference: https://developer.android.com/studio/build/configure-apk-splits#configure-density-split
SCREEN_DENSITIES = (
    "xxxhdpi",
    "xxhdpi",
    "xhdpi",
    "hdpi",
    "mdpi",
    "ldpi",
    "280",
    "360",
    "420",
    "480",
    "560",
)

SPLIT_PARAMS = ABIS + UNSUPPORTED_ABIS + SCREEN_DENSITIES
