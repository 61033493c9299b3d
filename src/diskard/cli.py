"""CLI interface for diskard."""

from __future__ import annotations

import json
import logging
from datetime import timedelta

import click

from diskard import __version__
from diskard.config import Config, ConfigError
from diskard.core.cleaner import clean as clean_findings
from diskard.core.scanner import scan as run_scan
from diskard.models.clean_result import CleanResult, DeleteMode
from diskard.models.finding import Category, RiskLevel
from diskard.models.scan_result import ScanOptions, ScanResult, SortOrder
from diskard.recognizers import all_recognizers
from diskard.utils import bytes_to_human, format_elapsed, parse_duration, parse_size

_RISK_COLORS = {
    RiskLevel.SAFE: "green",
    RiskLevel.MODERATE: "yellow",
    RiskLevel.RISKY: "red",
}


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _load_config() -> Config:
    try:
        return Config.load()
    except ConfigError as e:
        raise click.ClickException(str(e)) from e


def _json_output(ctx: click.Context) -> bool:
    return ctx.obj["format"] == "json"


# ── option parsing ───────────────────────────────────────────────────────

def _parse_risk(ctx: click.Context, param: click.Parameter, value: str | None) -> RiskLevel | None:
    if value is None:
        return None
    try:
        return RiskLevel.from_str(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


def _parse_category(ctx: click.Context, param: click.Parameter, value: str | None) -> Category | None:
    if value is None:
        return None
    try:
        return Category.from_key(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


def _parse_size(ctx: click.Context, param: click.Parameter, value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return parse_size(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


def _parse_duration(ctx: click.Context, param: click.Parameter, value: str | None) -> timedelta | None:
    if value is None:
        return None
    try:
        return parse_duration(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


def _risk_option(help_text: str):
    return click.option(
        "--risk", "-r", default=None, callback=_parse_risk, metavar="safe|moderate|risky", help=help_text
    )


def _category_option():
    return click.option(
        "--category", "-c", default=None, callback=_parse_category,
        help="Only report this category (e.g. xcode, node, rust)",
    )


def _older_than_option():
    return click.option(
        "--older-than", default=None, callback=_parse_duration,
        help="Only report items not modified for this long (e.g. 7d, 12h, 2w)",
    )


def resolve_delete_mode(dry_run: bool, permanent: bool, trash: bool, config: Config) -> DeleteMode:
    """Pick the delete mode: --dry-run, then --permanent, then --trash, then the config."""
    if dry_run:
        return DeleteMode.DRY_RUN
    if permanent:
        return DeleteMode.PERMANENT
    if trash:
        return DeleteMode.TRASH
    return config.delete_mode()


# ── output ───────────────────────────────────────────────────────────────

def _risk_label(risk: RiskLevel) -> str:
    return click.style(f"{str(risk):8s}", fg=_RISK_COLORS[risk])


def _print_findings(result: ScanResult, numbered: bool = False) -> None:
    for i, finding in enumerate(result.findings, 1):
        prefix = f"{i:>3}. " if numbered else "  "
        click.echo(
            f"{prefix}{click.style(f'{finding.size_human:>10s}', fg='cyan')}  {_risk_label(finding.risk)}  "
            f"{finding.category.label:12s}  {finding.description}"
        )
        click.echo(f"{' ' * len(prefix)}{click.style(str(finding.path), fg='bright_black')}")


def _print_errors(errors: list[str]) -> None:
    if not errors:
        return
    click.echo(f"\n{click.style('!', fg='yellow', bold=True)} {len(errors)} recognizer(s) failed:")
    for message in errors:
        click.echo(f"    {click.style(message, fg='red')}")


def _print_scan_table(result: ScanResult) -> None:
    if not result.findings:
        click.echo("\nNo reclaimable space found.")
    else:
        click.echo(
            f"\n  {'SIZE':>10s}  {'RISK':8s}  {'CATEGORY':12s}  DESCRIPTION"
        )
        _print_findings(result)
        click.echo(
            f"\nTotal reclaimable: {click.style(bytes_to_human(result.total_reclaimable), fg='green', bold=True)}"
            f" ({len(result.findings)} items, scanned in {format_elapsed(result.scan_duration)})"
        )
    _print_errors(result.errors)
    click.echo()


def _print_clean_result(result: CleanResult, mode: DeleteMode) -> None:
    verb = {
        DeleteMode.TRASH: "Moved to Trash",
        DeleteMode.PERMANENT: "Deleted",
        DeleteMode.DRY_RUN: "Would delete",
    }[mode]
    click.echo(
        f"\n{click.style('✓', fg='green', bold=True)} {verb} {result.deleted_count} items, "
        f"freed {click.style(bytes_to_human(result.freed_bytes), fg='green', bold=True)}"
    )
    if result.errors:
        click.echo(f"\n{click.style('!', fg='yellow', bold=True)} {len(result.errors)} error(s):")
        for path, message in result.errors:
            click.echo(f"    {click.style(path, fg='red')} — {message}")
    click.echo()


def _on_progress(recognizer_id: str, status: str) -> None:
    if status == "error":
        click.echo(f"  {click.style('✗', fg='red')} {recognizer_id:25s} — error during scan", err=True)


# ── main ─────────────────────────────────────────────────────────────────

@click.group()
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
@click.option(
    "--format", "output_format", type=click.Choice(["table", "json"]), default="table",
    help="Output format",
)
@click.version_option(version=__version__, prog_name="diskard")
@click.pass_context
def main(ctx: click.Context, verbose: int, output_format: str) -> None:
    """diskard — find and reclaim disk space used by developer tools."""
    _setup_logging(verbose)
    ctx.obj = {"format": output_format}


# ── scan ─────────────────────────────────────────────────────────────────

@main.command()
@_risk_option("Highest risk level to report (default: config risk_tolerance)")
@click.option("--min-size", default=None, callback=_parse_size, help="Minimum size to report (e.g. 10MB, 1GB)")
@_category_option()
@click.option(
    "--sort", "sort_order", type=click.Choice([s.value for s in SortOrder]), default=SortOrder.SIZE.value,
    help="Sort order",
)
@_older_than_option()
@click.pass_context
def scan(ctx, risk, min_size, category, sort_order, older_than) -> None:
    """Scan for reclaimable disk space (preview only, never deletes)."""
    config = _load_config()
    options = ScanOptions(
        max_risk=risk if risk is not None else config.max_risk(),
        min_size=min_size if min_size is not None else config.defaults.min_size,
        category=category,
        older_than=older_than,
        sort=SortOrder(sort_order),
    )

    if _json_output(ctx):
        result = run_scan(all_recognizers(), config, options)
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    click.echo(f"\n{click.style('🔍', bold=True)} Scanning...")
    result = run_scan(all_recognizers(), config, options, on_progress=_on_progress)
    _print_scan_table(result)


# ── clean ────────────────────────────────────────────────────────────────

@main.command()
@click.option("--dry-run", is_flag=True, help="Show what would be deleted without deleting it")
@click.option("--trash", is_flag=True, help="Move items to the Trash")
@click.option("--permanent", is_flag=True, help="Delete items permanently")
@_risk_option("Highest risk level to clean (default: safe)")
@_category_option()
@_older_than_option()
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.pass_context
def clean(ctx, dry_run, trash, permanent, risk, category, older_than, yes) -> None:
    """Scan and delete reclaimable items."""
    as_json = _json_output(ctx)
    config = _load_config()
    mode = resolve_delete_mode(dry_run, permanent, trash, config)
    options = ScanOptions(
        max_risk=risk if risk is not None else RiskLevel.SAFE,
        min_size=config.defaults.min_size,
        category=category,
        older_than=older_than,
    )
    if as_json and not yes and mode is not DeleteMode.DRY_RUN:
        raise click.UsageError("--yes is required to clean with --format json")

    result = run_scan(all_recognizers(), config, options, on_progress=None if as_json else _on_progress)

    if not result.findings:
        if as_json:
            click.echo(json.dumps(CleanResult().to_dict(), indent=2))
        else:
            click.echo("Nothing to clean.")
        return

    if not as_json:
        click.echo(f"\n{click.style('Items to clean:', bold=True)}")
        _print_findings(result, numbered=True)
        click.echo(f"\nTotal: {click.style(bytes_to_human(result.total_reclaimable), fg='green', bold=True)}")

        if mode is not DeleteMode.DRY_RUN and not yes:
            label = "PERMANENTLY DELETE" if mode is DeleteMode.PERMANENT else "Move to Trash"
            if not click.confirm(f"\n{label} these {len(result.findings)} items?", default=False):
                click.echo("Cancelled.")
                return

    clean_result = clean_findings(result.findings, mode)

    if as_json:
        click.echo(json.dumps(clean_result.to_dict(), indent=2))
        return
    _print_clean_result(clean_result, mode)
    if mode is DeleteMode.DRY_RUN:
        click.echo(click.style("Dry run — no files were deleted.", fg="yellow", bold=True))


# ── list ─────────────────────────────────────────────────────────────────

@main.group("list")
def list_group() -> None:
    """List what diskard knows about."""


@list_group.command("targets")
@click.pass_context
def list_targets(ctx) -> None:
    """List every recognizer and whether it is enabled."""
    config = _load_config()
    recognizers = all_recognizers()

    if _json_output(ctx):
        data = [
            {
                "id": r.id,
                "name": r.name,
                "category": r.category.label,
                "enabled": config.is_recognizer_enabled(r.id),
            }
            for r in recognizers
        ]
        click.echo(json.dumps(data, indent=2))
        return

    click.echo(f"\n  {'#':>3}  {'ID':25s}  {'CATEGORY':12s}  NAME")
    for i, r in enumerate(recognizers, 1):
        enabled = config.is_recognizer_enabled(r.id)
        status = click.style("enabled", fg="green") if enabled else click.style("disabled", fg="red")
        click.echo(f"  {i:>3}  {click.style(f'{r.id:25s}', fg='cyan')}  {r.category.label:12s}  {r.name}  {status}")

    path = Config.path()
    if path is not None:
        click.echo(f"\n  Disable recognizers in {click.style(str(path), fg='bright_black')}")
    click.echo()


# ── config ───────────────────────────────────────────────────────────────

@main.group("config")
def config_group() -> None:
    """Show or initialize the configuration file."""


@config_group.command("show")
def config_show() -> None:
    """Print the effective configuration."""
    click.echo(json.dumps(_load_config().to_dict(), indent=2))


@config_group.command("init")
def config_init() -> None:
    """Write the default configuration file."""
    try:
        path = Config.init()
    except ConfigError as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"{click.style('✓', fg='green', bold=True)} Config initialized at {click.style(str(path), fg='cyan')}")


@config_group.command("path")
def config_path() -> None:
    """Print where the configuration file lives."""
    path = Config.path()
    if path is None:
        raise click.ClickException("Cannot determine config directory")
    click.echo(str(path))


# ── interactive ──────────────────────────────────────────────────────────

@main.command()
@_risk_option("Highest risk level to show (default: config risk_tolerance)")
@_category_option()
def interactive(risk, category) -> None:
    """Scan, then pick what to delete in a terminal UI."""
    from diskard.tui.app import run as run_tui

    config = _load_config()
    options = ScanOptions(
        max_risk=risk if risk is not None else config.max_risk(),
        min_size=config.defaults.min_size,
        category=category,
    )
    click.echo(f"{click.style('🔍', bold=True)} Scanning...")
    result = run_scan(all_recognizers(), config, options, on_progress=_on_progress)
    if not result.findings:
        click.echo("No reclaimable space found.")
        return

    state = run_tui(result.findings)
    if state.status_message:
        click.echo(state.status_message.strip())
