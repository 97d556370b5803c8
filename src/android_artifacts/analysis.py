"""
Android Artifacts - Build Output Analysis Module

This module decomposes Gradle build output file names (APK/AAB) into
module, product flavour, build type, signing state and split information,
and groups a flat list of paths into a module -> build type -> flavour
mapping of artifact bundles.

APK/AAB base name layout: <module>-<product flavour?>-<build type>.<apk|aab>
Sample APK path: $BITRISE_DEPLOY_DIR/app-minApi21-demo-hdpi-debug.apk
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from . import __version__
from .constants import (
    AAB_EXTENSION,
    BITRISE_SIGNED_SUFFIX,
    SCHEMA_VERSION,
    SIGNING_SUFFIX_VARIANTS,
    SPLIT_PARAMS,
    UNIVERSAL_SPLIT_PARAM,
    UNSIGNED_SUFFIX,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SigningInfo:
    unsigned: bool = False
    bitrise_signed: bool = False


@dataclass(frozen=True)
class SplitInfo:
    split_params: Tuple[str, ...] = ()
    universal: bool = False


@dataclass(frozen=True)
class ArtifactInfo:
    module: str = ""
    product_flavour: str = ""
    build_type: str = ""
    signing_info: SigningInfo = field(default_factory=SigningInfo)
    split_info: SplitInfo = field(default_factory=SplitInfo)


@dataclass
class Artifact:
    """All files produced for one module/build type/flavour variant."""

    apk: Optional[str] = None
    aab: Optional[str] = None
    split: List[str] = field(default_factory=list)
    universal_apk: Optional[str] = None


SplitArtifactMeta = Artifact

# module -> build type -> product flavour -> artifact
ArtifactMap = Dict[str, Dict[str, Dict[str, Artifact]]]


class ArtifactNotFoundError(LookupError):
    """Raised when a path does not resolve to a slot of the artifact map."""

    def __init__(self, path: str, artifact_map: ArtifactMap) -> None:
        self.path = path
        self.artifact_map = artifact_map
        super().__init__(
            f"artifact: {path} is not part of the artifact mapping: "
            f"{format_artifact_map(artifact_map)}"
        )


# =============================================================================
# NAME PARSING
# =============================================================================


def _split_extension(path: str) -> Tuple[str, str]:
    return os.path.splitext(os.path.basename(path))


def parse_signing_info(path: str) -> Tuple[SigningInfo, str]:
    """Return the signing info and the base name without extension and signing suffix."""
    base, _ = _split_extension(path)

    bitrise_signed = False
    if base.endswith(BITRISE_SIGNED_SUFFIX):
        base = base[: -len(BITRISE_SIGNED_SUFFIX)]
        bitrise_signed = True

    unsigned = False
    if base.endswith(UNSIGNED_SUFFIX):
        base = base[: -len(UNSIGNED_SUFFIX)]
        unsigned = True

    return SigningInfo(unsigned=unsigned, bitrise_signed=bitrise_signed), base


def _first_letter_upper(value: str) -> str:
    return value[:1].upper() + value[1:]


def parse_split_info(flavour: str) -> Tuple[SplitInfo, str]:
    """Strip known ABI and density split params from a flavour string.

    Handles flavour strings like:
        minApi21-full-hdpi   (2 flavours + density split)
        hdpiArmeabi          (density and ABI split)
        demo-hdpiArm64-v8a   (flavour + density and ABI split)

    Returns the split info and the remaining product flavour.
    """
    split_params: List[str] = []
    universal = False

    for split_param in SPLIT_PARAMS:
        # In a density + ABI split the second param starts upper case: demo-hdpiArm64-v8a
        for candidate in (split_param, _first_letter_upper(split_param)):
            if candidate in flavour:
                flavour = flavour.replace(candidate, "", 1)
                split_params.append(split_param)
                if split_param == UNIVERSAL_SPLIT_PARAM:
                    universal = True
                break

    if flavour.startswith("-"):
        flavour = flavour[1:]
    if flavour.endswith("-"):
        flavour = flavour[:-1]
    return SplitInfo(split_params=tuple(split_params), universal=universal), flavour


def parse_artifact_info(path: str) -> ArtifactInfo:
    signing_info, base = parse_signing_info(path)

    segments = base.split("-")
    if len(segments) < 2:
        # Customized artifact name, the layout is unknown.
        return ArtifactInfo(signing_info=signing_info)

    split_info = SplitInfo()
    product_flavour = ""
    if len(segments) > 2:
        split_info, product_flavour = parse_split_info("-".join(segments[1:-1]))

    return ArtifactInfo(
        module=segments[0],
        product_flavour=product_flavour,
        build_type=segments[-1],
        signing_info=signing_info,
        split_info=split_info,
    )


# =============================================================================
# ARTIFACT MAP
# =============================================================================


def _artifact_slot(artifact_map: ArtifactMap, info: ArtifactInfo) -> Artifact:
    """Get or create the artifact bundle for the variant described by info."""
    build_types = artifact_map.setdefault(info.module, {})
    flavours = build_types.setdefault(info.build_type, {})
    return flavours.setdefault(info.product_flavour, Artifact())


def _find_artifact(artifact_map: ArtifactMap, info: ArtifactInfo) -> Optional[Artifact]:
    build_types = artifact_map.get(info.module)
    if build_types is None:
        return None
    flavours = build_types.get(info.build_type)
    if flavours is None:
        return None
    return flavours.get(info.product_flavour)


def _signing_variants(path: str) -> List[str]:
    _, base = parse_signing_info(path)
    _, ext = _split_extension(path)
    directory = os.path.dirname(path)
    return [
        os.path.join(directory, base + suffix + ext)
        for suffix in SIGNING_SUFFIX_VARIANTS
    ]


def _warn(message: str, collected_warnings: Optional[List[str]]) -> None:
    logger.warning(message)
    if collected_warnings is not None:
        collected_warnings.append(message)


def map_build_artifacts(
    paths: Iterable[str], collected_warnings: Optional[List[str]] = None
) -> ArtifactMap:
    """Group build output paths into module -> build type -> flavour -> Artifact.

    A second AAB or universal APK for the same variant replaces the previous
    one and is reported as a warning. When ``collected_warnings`` is given,
    the warning messages are appended to it as well.
    """
    artifact_map: ArtifactMap = {}
    for path in paths:
        info = parse_artifact_info(path)
        logger.debug("Parsed %s: %s", path, info)
        artifact = _artifact_slot(artifact_map, info)
        _, ext = _split_extension(path)

        if ext == AAB_EXTENSION:
            if artifact.aab:
                _warn(
                    f"Multiple AAB generated for module: {info.module}, "
                    f"productFlavour: {info.product_flavour}, "
                    f"buildType: {info.build_type}: {path}",
                    collected_warnings,
                )
            artifact.aab = path
            continue

        if not info.split_info.split_params:
            if artifact.apk:
                # -unsigned and -bitrise-signed versions of the same apk may both exist
                logger.debug("Replacing APK %s with %s", artifact.apk, path)
            artifact.apk = path
            continue

        if info.split_info.universal:
            if artifact.universal_apk:
                _warn(
                    f"Multiple universal APK generated for module: {info.module}, "
                    f"productFlavour: {info.product_flavour}, "
                    f"buildType: {info.build_type}: {path}",
                    collected_warnings,
                )
            artifact.universal_apk = path

        if not any(variant in artifact.split for variant in _signing_variants(path)):
            artifact.split.append(path)

    return artifact_map


def iter_artifacts(
    artifact_map: ArtifactMap,
) -> Iterator[Tuple[str, str, str, Artifact]]:
    for module in sorted(artifact_map):
        build_types = artifact_map[module]
        for build_type in sorted(build_types):
            flavours = build_types[build_type]
            for product_flavour in sorted(flavours):
                yield module, build_type, product_flavour, flavours[product_flavour]


def artifact_map_to_dict(artifact_map: ArtifactMap) -> Dict[str, Any]:
    return {
        module: {
            build_type: {
                product_flavour: asdict(artifact)
                for product_flavour, artifact in flavours.items()
            }
            for build_type, flavours in build_types.items()
        }
        for module, build_types in artifact_map.items()
    }


def format_artifact_map(artifact_map: ArtifactMap) -> str:
    return json.dumps(artifact_map_to_dict(artifact_map), indent=2, sort_keys=True)


def create_split_artifact_meta(path: str, paths: Iterable[str]) -> SplitArtifactMeta:
    """Return the artifact bundle the given split APK belongs to.

    The map is rebuilt from ``paths``; raises ArtifactNotFoundError when the
    variant parsed from ``path`` is missing from it.
    """
    artifact_map = map_build_artifacts(paths)
    artifact = _find_artifact(artifact_map, parse_artifact_info(path))
    if artifact is None:
        raise ArtifactNotFoundError(path, artifact_map)
    return artifact


# =============================================================================
# SNAPSHOT
# =============================================================================


def analyze_artifacts(
    paths: Iterable[str],
    cli_arguments: Optional[Dict[str, Any]] = None,
    typer_version: str = "unknown",
) -> Dict[str, Any]:
    input_paths = list(paths)
    collected_warnings: List[str] = []
    artifact_map = map_build_artifacts(input_paths, collected_warnings)

    unrecognized = [
        path for path in input_paths if not parse_artifact_info(path).module
    ]

    return {
        "run_metadata": {
            "tool_version": __version__,
            "schema_version": SCHEMA_VERSION,
            "timestamp_utc": datetime.now(timezone.utc)
            .replace(microsecond=0)
            .isoformat()
            .replace("+00:00", "Z"),
            "run_id": _generate_uuid(),
            "cli_arguments": cli_arguments or {},
            "typer_version": typer_version,
        },
        "input_paths": input_paths,
        "artifact_map": artifact_map_to_dict(artifact_map),
        "variant_count": sum(1 for _ in iter_artifacts(artifact_map)),
        "unrecognized_paths": unrecognized,
        "warnings": collected_warnings,
    }


def _generate_uuid() -> str:
    # Local import to avoid uuid dependency at module import time.
    import uuid

    return str(uuid.uuid4())
