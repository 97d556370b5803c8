from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List


def write_json_snapshot(output_dir: Path, snapshot: Dict[str, Any]) -> Path:
    output_path = output_dir / "android_artifacts.json"
    with output_path.open("w", encoding="utf-8") as fp:
        json.dump(snapshot, fp, indent=2, sort_keys=True)
        fp.write("\n")
    return output_path


def write_markdown_report(output_dir: Path, snapshot: Dict[str, Any]) -> Path:
    report_path = output_dir / "android_artifacts_report.md"
    lines: List[str] = []
    lines.append("# Android Build Artifacts Report")
    lines.append("")

    run_metadata = snapshot["run_metadata"]
    lines.append("## Run Metadata")
    lines.append(f"- Timestamp (UTC): {run_metadata['timestamp_utc']}")
    lines.append(f"- Run ID: {run_metadata['run_id']}")
    lines.append(f"- Tool version: {run_metadata['tool_version']}")
    lines.append(f"- Schema version: {run_metadata['schema_version']}")
    lines.append(f"- Typer version: {run_metadata.get('typer_version', 'unknown')}")
    cli_args = run_metadata.get("cli_arguments", {})
    if cli_args:
        lines.append("- CLI arguments:")
        for key, value in cli_args.items():
            lines.append(f"  - {key}: {value}")
    lines.append(f"- Input paths: {len(snapshot['input_paths'])}")
    lines.append("")

    lines.append("## Build Variants")
    lines.append(f"- Variants detected: {snapshot['variant_count']}")
    for module, build_type, product_flavour, artifact in _iter_variants(snapshot):
        lines.append(
            f"- {module or '(unknown)'} / {build_type or '(unknown)'} / {product_flavour or '(default)'}"
        )
        lines.append(f"  - APK: {artifact['apk'] or 'n/a'}")
        lines.append(f"  - AAB: {artifact['aab'] or 'n/a'}")
        lines.append(f"  - Universal APK: {artifact['universal_apk'] or 'n/a'}")
        if artifact["split"]:
            lines.append("  - Split APKs:")
            for path in artifact["split"]:
                lines.append(f"    - {path}")
        else:
            lines.append("  - Split APKs: none")
    lines.append("")

    lines.append("## Unrecognized Artifact Names")
    if snapshot["unrecognized_paths"]:
        for path in snapshot["unrecognized_paths"]:
            lines.append(f"- {path}")
    else:
        lines.append("- (none)")
    lines.append("")

    if snapshot["warnings"]:
        lines.append("## Warnings")
        for warning in snapshot["warnings"]:
            lines.append(f"- {warning}")
        lines.append("")

    recommendations = _build_recommendations(snapshot)
    if recommendations:
        lines.append("## Recommendations")
        for rec in recommendations:
            lines.append(f"- {rec}")
        lines.append("")

    with report_path.open("w", encoding="utf-8") as fp:
        fp.write("\n".join(lines) + "\n")
    return report_path


def _iter_variants(snapshot: Dict[str, Any]):
    artifact_map = snapshot["artifact_map"]
    for module in sorted(artifact_map):
        for build_type in sorted(artifact_map[module]):
            flavours = artifact_map[module][build_type]
            for product_flavour in sorted(flavours):
                yield module, build_type, product_flavour, flavours[product_flavour]


def _build_recommendations(snapshot: Dict[str, Any]) -> List[str]:
    recs: List[str] = []
    for module, build_type, product_flavour, artifact in _iter_variants(snapshot):
        label = f"{module}/{build_type}/{product_flavour or '(default)'}"
        if artifact["split"] and not artifact["universal_apk"]:
            recs.append(
                f"{label} has split APKs but no universal APK. Enable `universalApk true` to get an installable fallback."
            )
    if snapshot["unrecognized_paths"]:
        recs.append(
            "Some artifact names do not follow <module>-<flavour>-<buildType>; customized output names cannot be grouped by variant."
        )
    return recs
