"""Command line interface for filesniff."""

from __future__ import annotations

import difflib
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Iterable

import click
import yaml
from click.core import ParameterSource
from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn
from rich.syntax import Syntax

from filesniff.analysis import FileClassifier, HashComputer
from filesniff.config import (
    ConfigError,
    ConfigManager,
    FilesniffConfig,
    assign_nested,
    resolve_with_precedence,
)
from filesniff.ingestion import DirectoryScanner
from filesniff.logging import configure_logging, get_logger
from filesniff.organization import FileOrganizer, suggest_extension_fixes
from filesniff.reporting import build_json_payload, render_report, signatures_table
from filesniff.scan import (
    CancellationToken,
    EnumerationError,
    ScanPipeline,
    ScanProgress,
    ScanReport,
    format_size,
)
from filesniff.signatures import SignatureLoader, SignatureLoadError, SignatureTable

console = Console()
LOGGER = get_logger("cli")


def _handle_cli_error(
    message: str,
    *,
    code: str,
    json_output: bool,
    details: Any | None = None,
    original: Exception | None = None,
) -> None:
    """Emit a standardized error and terminate the command appropriately.

    Args:
        message: Human-readable error message.
        code: Machine-readable error identifier.
        json_output: Indicates whether JSON mode is active.
        details: Optional structured details to include in the payload.
        original: Original exception for chaining when not using JSON.

    Raises:
        SystemExit: When emitting JSON output to terminate the command.
        click.ClickException: For non-JSON flows to surface the error.
    """

    if json_output:
        payload: dict[str, Any] = {"error": {"code": code, "message": message}}
        if details is not None:
            payload["error"]["details"] = details
        console.print_json(data=payload)
        raise SystemExit(1)

    if isinstance(original, click.ClickException):
        raise original

    raise click.ClickException(message) from original


def _emit_message(message: Any, *, mode: str, quiet: bool, summary_only: bool) -> None:
    """Conditionally print CLI output according to quiet/summary settings.

    Args:
        message: Renderable or string to emit.
        mode: Output mode identifier (`detail`, `summary`, `warning`, or `error`).
        quiet: Whether quiet mode is active.
        summary_only: Whether only summary lines should be emitted.
    """

    if quiet and mode != "error":
        return
    if summary_only and mode not in {"summary", "warning", "error"}:
        return
    console.print(message)


def _format_summary_line(command: str, root: Path | str, metrics: dict[str, Any]) -> str:
    """Return a consistent summary line for CLI commands."""
    parts = ", ".join(f"{key}={value}" for key, value in metrics.items())
    return f"[green]{command} summary for {root}: {parts}.[/green]"


def _load_config() -> FilesniffConfig:
    manager = ConfigManager()
    manager.ensure_exists()
    return manager.load()


def _build_signature_table(
    paths: Iterable[str],
    *,
    warn: bool,
    quiet: bool = False,
    summary_only: bool = False,
) -> SignatureTable:
    """Return the built-in table extended with every loadable signature file.

    Files that fail to load are reported and skipped; scanning continues with
    whatever rules were loaded.
    """
    table = SignatureTable.with_builtins()
    loader = SignatureLoader()
    for raw_path in paths:
        try:
            table.load_additional(loader.load(Path(raw_path)))
        except SignatureLoadError as exc:
            LOGGER.warning("%s", exc)
            if warn:
                _emit_message(
                    f"[yellow]Warning: could not load custom signatures from {raw_path}: "
                    f"{exc}[/yellow]",
                    mode="warning",
                    quiet=quiet,
                    summary_only=summary_only,
                )
            continue
        if warn:
            _emit_message(
                f"[green]Loaded custom signatures from: {raw_path}[/green]",
                mode="detail",
                quiet=quiet,
                summary_only=summary_only,
            )
    return table.freeze()


def _run_with_progress(
    pipeline: ScanPipeline,
    paths: list[Path],
    workers: int | None,
    *,
    interval_ms: int,
) -> ScanReport:
    """Run the pipeline in the background while polling progress into a rich bar."""
    progress = ScanProgress(len(paths))
    cancel = CancellationToken()
    with ThreadPoolExecutor(max_workers=1, thread_name_prefix="filesniff-dispatch") as executor:
        future = executor.submit(pipeline.run, paths, workers, progress, cancel)
        with Progress(
            TextColumn("[cyan]Progress:[/cyan]"),
            BarColumn(bar_width=40),
            MofNCompleteColumn(),
            TextColumn("{task.description}"),
            console=console,
            transient=True,
        ) as bar:
            task_id = bar.add_task("", total=len(paths))
            try:
                while not future.done():
                    snapshot = progress.snapshot()
                    name = snapshot.current_file
                    short = name if len(name) <= 30 else f"{name[:30]}..."
                    bar.update(task_id, completed=snapshot.completed, description=short)
                    time.sleep(interval_ms / 1000.0)
            except KeyboardInterrupt:
                cancel.cancel()
                console.print("[yellow]Cancelling scan after in-flight files...[/yellow]")
            bar.update(task_id, completed=progress.snapshot().completed)
        return future.result()


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="filesniff")
def cli() -> None:
    """filesniff identifies files by their content instead of their extension."""


@cli.command()
@click.argument("path", type=click.Path(path_type=str))
@click.option("-r", "--recursive", is_flag=True, help="Scan subdirectories.")
@click.option("-j", "--json", "json_output", is_flag=True, help="Output results as JSON.")
@click.option("-o", "--organize", is_flag=True, help="Copy files into type-based folders.")
@click.option("-s", "--sequential", is_flag=True, help="Disable multi-threading.")
@click.option(
    "-S",
    "--signatures",
    "signature_paths",
    multiple=True,
    type=click.Path(path_type=str),
    help="Load custom signatures from a JSON or YAML file (repeatable).",
)
@click.option("-w", "--workers", type=click.IntRange(min=1), help="Number of worker threads.")
@click.option("--hash", "compute_hash", is_flag=True, help="Compute SHA-256 digests.")
@click.option("--summary", "summary_mode", is_flag=True, help="Only emit summary lines.")
@click.option("--quiet", is_flag=True, help="Suppress non-error output.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def scan(
    ctx: click.Context,
    path: str,
    recursive: bool,
    json_output: bool,
    organize: bool,
    sequential: bool,
    signature_paths: tuple[str, ...],
    workers: int | None,
    compute_hash: bool,
    summary_mode: bool,
    quiet: bool,
    verbose: bool,
) -> None:
    """Classify every file under PATH by its magic number.

    Args:
        ctx: Click context used for parameter source inspection.
        path: File or directory to analyze.
        recursive: Whether to include subdirectories.
        json_output: If True, emit the machine-readable report.
        organize: If True, copy identified files into type folders.
        sequential: If True, classify on a single worker.
        signature_paths: Additional signature files to load.
        workers: Explicit worker count.
        compute_hash: Whether to compute SHA-256 digests.
        summary_mode: When True, limit output to summary lines and warnings.
        quiet: When True, suppress non-error CLI output entirely.
        verbose: When True, log at DEBUG level.
    """

    try:
        config = _load_config()
        configure_logging(config.logging, verbose=verbose)

        explicit_quiet = ctx.get_parameter_source("quiet") == ParameterSource.COMMANDLINE
        explicit_summary = ctx.get_parameter_source("summary_mode") == ParameterSource.COMMANDLINE
        quiet_enabled = quiet if explicit_quiet else config.cli.quiet_default
        summary_only = summary_mode if explicit_summary else config.cli.summary_default

        if json_output:
            if explicit_quiet and quiet_enabled:
                raise click.ClickException("--json cannot be combined with --quiet.")
            if explicit_summary and summary_only:
                raise click.ClickException("--json cannot be combined with --summary.")
            quiet_enabled = False
            summary_only = False

        if quiet_enabled and summary_only:
            raise click.ClickException(
                "Quiet and summary modes cannot both be enabled. Adjust CLI defaults or flags."
            )

        settings = config.scan
        table = _build_signature_table(
            [*config.signatures.paths, *signature_paths],
            warn=not json_output,
            quiet=quiet_enabled,
            summary_only=summary_only,
        )

        scanner = DirectoryScanner(
            recursive=recursive or settings.recursive,
            include_hidden=settings.include_hidden,
            follow_symlinks=settings.follow_symlinks,
            exclude_dirs={config.organization.folder_name},
        )
        root = Path(path).expanduser()
        paths = scanner.collect(root)
        root = root.resolve()
        organize_root = root if root.is_dir() else root.parent

        if not paths:
            if json_output:
                console.print_json(data={"error": "No files found", "files": []})
            else:
                _emit_message(
                    "[yellow]No files found to analyze.[/yellow]",
                    mode="warning",
                    quiet=quiet_enabled,
                    summary_only=summary_only,
                )
            return

        classifier = FileClassifier(
            table,
            sample_bytes=settings.sample_bytes,
            prefix_bytes=settings.prefix_bytes,
            hasher=HashComputer() if (compute_hash or settings.compute_hash) else None,
        )
        pipeline = ScanPipeline(
            classifier,
            max_workers=settings.max_workers,
            sequential_threshold=settings.sequential_threshold,
            entropy_threshold=settings.entropy_threshold,
        )
        requested = 1 if sequential else (workers or settings.workers)

        _emit_message(
            f"[blue]Path:[/blue] {root}\n"
            f"[blue]Mode:[/blue] {'Recursive' if scanner.recursive else 'Non-recursive'}\n"
            f"[blue]Workers:[/blue] {pipeline.worker_count(len(paths), requested)}\n"
            f"[blue]Files found:[/blue] {len(paths)}",
            mode="detail",
            quiet=quiet_enabled,
            summary_only=summary_only,
        )

        if json_output or quiet_enabled or summary_only:
            report = pipeline.run(paths, requested)
        else:
            report = _run_with_progress(
                pipeline, paths, requested, interval_ms=settings.progress_interval_ms
            )

        organized_into: str | None = None
        organized_count = 0
        if organize or config.organization.enabled:
            organizer = FileOrganizer(organize_root, config.organization.folder_name)
            outcome = organizer.organize(report.results)
            organized_into = str(outcome.output_root)
            organized_count = len(outcome.copied)

        fixes = suggest_extension_fixes(report.results)

        if json_output:
            console.print_json(
                data=build_json_payload(report, fixes=fixes, organized_root=organized_into)
            )
            return

        if not summary_only and not quiet_enabled:
            render_report(console, report, title=f"Analysis results for {root}")

        summary = report.summary()
        for label, count, style in (
            ("corrupted or empty", summary.corrupt_count, "red"),
            ("with mismatched extensions", summary.mismatch_count, "yellow"),
            ("likely encrypted or compressed", summary.encrypted_count, "blue"),
        ):
            if count:
                _emit_message(
                    f"[{style}]{count} file(s) {label}.[/{style}]",
                    mode="warning",
                    quiet=quiet_enabled,
                    summary_only=summary_only,
                )
        for fix in fixes:
            _emit_message(
                f"  - {fix.source.name} -> {fix.suggested_name}",
                mode="detail",
                quiet=quiet_enabled,
                summary_only=summary_only,
            )
        if organized_into is not None:
            _emit_message(
                f"[cyan]Organized {organized_count} file(s) into {organized_into}[/cyan]",
                mode="detail",
                quiet=quiet_enabled,
                summary_only=summary_only,
            )
        if report.cancelled:
            _emit_message(
                "[yellow]Scan was cancelled; some files were skipped.[/yellow]",
                mode="warning",
                quiet=quiet_enabled,
                summary_only=summary_only,
            )

        _emit_message(
            _format_summary_line(
                "Scan",
                root,
                {
                    "files": summary.total_files,
                    "types": len(summary.types),
                    "size": format_size(summary.total_size_bytes),
                    "workers": summary.workers,
                    "seconds": f"{summary.elapsed_seconds:.2f}",
                },
            ),
            mode="summary",
            quiet=quiet_enabled,
            summary_only=summary_only,
        )
    except ConfigError as exc:
        _handle_cli_error(str(exc), code="config_error", json_output=json_output, original=exc)
    except EnumerationError as exc:
        _handle_cli_error(
            str(exc), code="enumeration_error", json_output=json_output, original=exc
        )
    except click.ClickException as exc:
        _handle_cli_error(str(exc), code="cli_error", json_output=json_output, original=exc)


@cli.group()
def signatures() -> None:
    """Inspect the signature table."""


@signatures.command("list")
@click.option(
    "-S",
    "--signatures",
    "signature_paths",
    multiple=True,
    type=click.Path(path_type=str),
    help="Include custom signatures from a JSON or YAML file (repeatable).",
)
@click.option("--json", "json_output", is_flag=True, help="Emit the table as JSON.")
def signatures_list(signature_paths: tuple[str, ...], json_output: bool) -> None:
    """Show the effective signature table in match order.

    Args:
        signature_paths: Additional signature files to load.
        json_output: If True, emit JSON instead of a table.
    """
    try:
        config = _load_config()
    except ConfigError as exc:
        _handle_cli_error(str(exc), code="config_error", json_output=json_output, original=exc)
        return

    table = _build_signature_table(
        [*config.signatures.paths, *signature_paths], warn=not json_output
    )
    if json_output:
        console.print_json(
            data={"signatures": [rule.model_dump(mode="json") for rule in table.rules]}
        )
        return
    console.print(signatures_table(table.rules))


@cli.group()
def config() -> None:
    """Manage filesniff configuration files and overrides."""


@config.command("view")
@click.option("--no-env", is_flag=True, help="Ignore environment overrides when displaying output.")
def config_view(no_env: bool) -> None:
    """Display the effective configuration after applying precedence rules.

    Args:
        no_env: If True, ignore environment-derived overrides.

    Raises:
        click.ClickException: If configuration cannot be loaded.
    """
    manager = ConfigManager()
    try:
        manager.ensure_exists()
        loaded = manager.load(include_env=not no_env)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    yaml_text = yaml.safe_dump(loaded.model_dump(mode="python"), sort_keys=False)
    console.print(Syntax(yaml_text, "yaml", word_wrap=True))


@config.command("set")
@click.argument("key")
@click.option("--value", required=True, help="Value to assign to KEY.")
def config_set(key: str, value: str) -> None:
    """Persist a configuration value expressed as a dotted KEY.

    Args:
        key: Dotted path describing the configuration field to update.
        value: YAML-literal value to write into the configuration file.

    Raises:
        click.ClickException: If parsing, assignment, or validation fails.
    """
    manager = ConfigManager()
    manager.ensure_exists()

    before = manager.read_text().splitlines()
    segments = [segment.strip() for segment in key.split(".") if segment.strip()]
    if not segments:
        raise click.ClickException("KEY must specify a dotted path such as 'scan.max_workers'.")

    try:
        parsed_value = yaml.safe_load(value)
    except yaml.YAMLError as exc:
        raise click.ClickException(f"Unable to parse value: {exc}") from exc

    try:
        file_data = manager.load_file_overrides()
        assign_nested(file_data, segments, parsed_value)
        resolve_with_precedence(defaults=FilesniffConfig(), file_overrides=file_data)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    manager.save(file_data)
    after = manager.read_text().splitlines()

    # The timestamp line changes on every save.
    diff = list(
        difflib.unified_diff(
            [line for line in before if not line.startswith("# Last updated:")],
            [line for line in after if not line.startswith("# Last updated:")],
            fromfile="config.yaml (before)",
            tofile="config.yaml (after)",
            lineterm="",
        )
    )

    if diff:
        console.print(Syntax("\n".join(diff), "diff", word_wrap=False))
    else:
        console.print("[yellow]No changes applied; value already up to date.[/yellow]")
        return

    console.print(f"[green]Updated {'.'.join(segments)}.[/green]")


@config.command("edit")
def config_edit() -> None:
    """Open the configuration file in an interactive editor session.

    Raises:
        click.ClickException: If edited content is invalid or cannot be saved.
    """
    manager = ConfigManager()
    manager.ensure_exists()

    original = manager.read_text()
    edited = click.edit(original, extension=".yaml")

    if edited is None:
        console.print("[yellow]Edit cancelled; no changes applied.[/yellow]")
        return

    if edited == original:
        console.print("[yellow]No changes detected.[/yellow]")
        return

    try:
        parsed = yaml.safe_load(edited) or {}
    except yaml.YAMLError as exc:
        raise click.ClickException(f"Invalid YAML: {exc}") from exc

    if not isinstance(parsed, dict):
        raise click.ClickException("Configuration file must contain a top-level mapping.")

    try:
        resolve_with_precedence(defaults=FilesniffConfig(), file_overrides=parsed)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    manager.save(parsed)
    console.print("[green]Configuration updated successfully.[/green]")


def main() -> None:
    """Invoke the Click CLI as the console script entry point."""
    cli()


if __name__ == "__main__":
    main()
