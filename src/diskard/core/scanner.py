"""Scan orchestration, filtering and ordering."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable, Sequence
from datetime import datetime, timezone
from pathlib import Path

from diskard.config import Config
from diskard.models.finding import Category, Finding
from diskard.models.recognizer import Recognizer
from diskard.models.scan_result import ScanOptions, ScanResult, SortOrder

log = logging.getLogger(__name__)

ProgressCallback = Callable[[str, str], None]  # (recognizer_id, status)
EnabledCheck = Callable[[str], bool]
IgnoredCheck = Callable[[Path], bool]


def run_recognizers(
    recognizers: Iterable[Recognizer],
    is_enabled: EnabledCheck,
    category: Category | None = None,
    on_progress: ProgressCallback | None = None,
) -> tuple[list[Finding], list[str]]:
    """Run every enabled recognizer and collect findings and error messages.

    Recognizers run one at a time, in the given order.  A failing
    recognizer is recorded in the error list and never stops the others.
    """
    findings: list[Finding] = []
    errors: list[str] = []

    for recognizer in recognizers:
        if not is_enabled(recognizer.id):
            log.debug("Recognizer '%s' disabled, skipping", recognizer.id)
            continue
        if category is not None and recognizer.category is not category:
            continue

        if on_progress:
            on_progress(recognizer.id, "scanning")
        log.debug("Running recognizer: %s", recognizer.name)
        try:
            found = recognizer.scan()
        except Exception as exc:
            log.exception("Recognizer '%s' failed during scan", recognizer.id)
            errors.append(f"{recognizer.name} ({recognizer.id}): {exc}")
            if on_progress:
                on_progress(recognizer.id, "error")
            continue

        findings.extend(found)
        if on_progress:
            on_progress(recognizer.id, "done")

    return findings, errors


def filter_findings(
    findings: Iterable[Finding],
    options: ScanOptions,
    is_ignored: IgnoredCheck,
    now: datetime | None = None,
) -> list[Finding]:
    """Keep the findings that pass every predicate in *options*.

    A finding with unknown ``last_modified`` always passes the age check.
    """
    now = now or datetime.now(timezone.utc)
    kept: list[Finding] = []
    for finding in findings:
        if finding.risk > options.max_risk:
            continue
        if finding.size_bytes < options.min_size:
            continue
        if is_ignored(finding.path):
            continue
        if options.category is not None and finding.category is not options.category:
            continue
        if (
            options.older_than is not None
            and finding.last_modified is not None
            and now - finding.last_modified < options.older_than
        ):
            continue
        kept.append(finding)
    return kept


def sort_findings(findings: Sequence[Finding], order: SortOrder) -> list[Finding]:
    """Return *findings* in the requested order (stable)."""
    match order:
        case SortOrder.SIZE:
            return sorted(findings, key=lambda f: f.size_bytes, reverse=True)
        case SortOrder.RISK:
            return sorted(findings, key=lambda f: f.risk, reverse=True)
        case SortOrder.CATEGORY:
            return sorted(findings, key=lambda f: f.category.label)
    raise ValueError(f"Unknown sort order: {order!r}")


def scan(
    recognizers: Iterable[Recognizer],
    config: Config,
    options: ScanOptions,
    on_progress: ProgressCallback | None = None,
) -> ScanResult:
    """Run the recognizers, then filter and order what they found."""
    start = time.perf_counter()

    raw, errors = run_recognizers(recognizers, config.is_recognizer_enabled, options.category, on_progress)
    kept = filter_findings(raw, options, config.is_path_ignored)
    ordered = sort_findings(kept, options.sort)

    result = ScanResult(
        findings=ordered,
        total_reclaimable=sum(f.size_bytes for f in ordered),
        scan_duration=time.perf_counter() - start,
        errors=errors,
    )
    log.info(
        "Scan finished: %d of %d findings kept, %d errors, %.2fs",
        len(ordered),
        len(raw),
        len(errors),
        result.scan_duration,
    )
    return result
