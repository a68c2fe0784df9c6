"""
Audit views over a record's history.

Summaries are derived from history, never stored.
"""

from __future__ import annotations

from typing import Any, Iterable

from .models import Mode, PermissionType, SharedRecord


def summarize_history(records: Iterable[SharedRecord]) -> dict[str, Any]:
    """
    Summarize a record history.

    Returns statistics about operations and access requests.
    """
    versions = list(records)
    if not versions:
        return {"total_versions": 0}

    mode_counts: dict[str, int] = {}
    requesters: dict[str, int] = {}
    granted = 0
    denied = 0

    for record in versions:
        mode_counts[record.mode.value] = mode_counts.get(record.mode.value, 0) + 1
        requesters[record.requester] = requesters.get(record.requester, 0) + 1
        if record.mode == Mode.REQUEST:
            if record.permission == PermissionType.GRANTED:
                granted += 1
            elif record.permission == PermissionType.DENIED:
                denied += 1

    return {
        "total_versions": len(versions),
        "mode_counts": mode_counts,
        "access_requests": {"granted": granted, "denied": denied},
        "requesters": sorted(requesters.items(), key=lambda x: -x[1]),
        "time_range": {
            "earliest": versions[0].updated,
            "latest": versions[-1].updated,
        },
    }


def format_history(records: Iterable[SharedRecord], record_id: str) -> str:
    """Format a record history as markdown."""
    versions = list(records)
    if not versions:
        return f"No history recorded for {record_id}."

    s = summarize_history(versions)
    lines = [
        f"# History of {record_id}",
        "",
        f"- Versions: {s['total_versions']}",
        f"- Time range: {s['time_range']['earliest']} to {s['time_range']['latest']}",
        f"- Access requests: {s['access_requests']['granted']} granted, "
        f"{s['access_requests']['denied']} denied",
        "",
        "| Updated | Mode | Requester | Shared with | Permission |",
        "|--------:|------|-----------|-------------|------------|",
    ]
    for record in versions:
        lines.append(
            f"| {record.updated} | {record.mode.value} | {record.requester} "
            f"| {record.shared_with} | {record.permission.name} |"
        )

    lines.extend([
        "",
        "## Operations",
        "",
        "| Mode | Count |",
        "|------|------:|",
    ])
    for mode, count in sorted(s["mode_counts"].items(), key=lambda x: -x[1]):
        lines.append(f"| {mode} | {count} |")

    return "\n".join(lines) + "\n"
