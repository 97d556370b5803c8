from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import List, Optional

import typer

from .analysis import ArtifactNotFoundError, analyze_artifacts, create_split_artifact_meta
from .reporting import write_json_snapshot, write_markdown_report

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="android-artifacts",
    help="Group Android build outputs (APK/AAB) by module, build type and product flavour.",
    add_completion=False,
)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command("map")
def map_command(
    paths: List[str] = typer.Argument(..., help="Build output paths (APK/AAB)."),
    output_dir: Optional[Path] = typer.Option(
        None,
        "--output-dir",
        envvar="ANDROID_ARTIFACTS_OUTPUT_DIR",
        help="Write android_artifacts.json here instead of printing it.",
    ),
    markdown: bool = typer.Option(
        False, "--markdown", help="Also write a Markdown report to --output-dir."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", envvar="ANDROID_ARTIFACTS_VERBOSE", help="Enable debug logging."
    ),
) -> None:
    """Map build outputs to module/buildType/flavour artifact bundles."""
    _setup_logging(verbose)
    cli_arguments = {"markdown": markdown, "verbose": verbose}
    if output_dir is not None:
        cli_arguments["output_dir"] = str(output_dir)
    snapshot = analyze_artifacts(
        paths, cli_arguments=cli_arguments, typer_version=typer.__version__
    )

    if output_dir is None:
        if markdown:
            logger.warning("--markdown requires --output-dir; skipping report")
        typer.echo(json.dumps(snapshot, indent=2, sort_keys=True))
        return

    output_dir.mkdir(parents=True, exist_ok=True)
    json_path = write_json_snapshot(output_dir, snapshot)
    typer.echo(f"Wrote {json_path}")
    if markdown:
        report_path = write_markdown_report(output_dir, snapshot)
        typer.echo(f"Wrote {report_path}")


@app.command("resolve")
def resolve_command(
    target: str = typer.Argument(..., help="Split APK whose group should be resolved."),
    paths: List[str] = typer.Argument(..., help="All build output paths."),
    verbose: bool = typer.Option(
        False, "--verbose", envvar="ANDROID_ARTIFACTS_VERBOSE", help="Enable debug logging."
    ),
) -> None:
    """Print the artifact bundle a split APK belongs to."""
    _setup_logging(verbose)
    try:
        artifact = create_split_artifact_meta(target, paths)
    except ArtifactNotFoundError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)
    typer.echo(json.dumps(asdict(artifact), indent=2, sort_keys=True))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
