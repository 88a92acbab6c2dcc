from __future__ import annotations

from collections.abc import Sequence

from vantage.models.bundle import BundleDiff
from vantage.models.runtime import MetricCheck
from vantage.models.threshold import ThresholdResult
from vantage.services.formatting import format_bytes, format_metric, format_signed_bytes, status_icon


def render_pr_comment(
    checks: Sequence[MetricCheck],
    diff: BundleDiff | None,
    build_id: int,
    run_url: str | None = None,
    size_result: ThresholdResult | None = None,
) -> str:
    """Markdown body for a pull-request comment.

    Only the text is produced here; posting it is the caller's job.
    """
    lines = [f"## Performance Results #{build_id}", ""]

    if checks:
        lines.append("| Metric | Route | Value | Status |")
        lines.append("|--------|-------|-------|--------|")
        for check in checks:
            lines.append(
                f"| {check.metric.label} | `{check.route}` | {format_metric(check.value, check.metric)} "
                f"| {status_icon(check.result.status)} |"
            )

    if size_result is not None:
        lines.append("")
        summary = size_result.message or "Bundle size within thresholds"
        lines.append(f"{status_icon(size_result.status)} {summary}")

    if diff is not None and (diff.modified_chunks or diff.added_chunks):
        lines.append("")
        lines.append("### Bundle Analysis")
        for item in diff.modified_chunks:
            lines.append(
                f"- **{item.chunk.name}**: {format_bytes(item.old_size)} → {format_bytes(item.new_size)} "
                f"({format_signed_bytes(item.size_delta)})"
            )
        for chunk in diff.added_chunks:
            lines.append(f"- **{chunk.name}**: {format_bytes(chunk.size)} (new)")

    if run_url:
        lines.append("")
        lines.append(f"[View detailed report]({run_url})")

    return "\n".join(lines) + "\n"
