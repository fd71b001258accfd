"""
Shared formatting utilities for gogo CLI output.
"""

from __future__ import annotations


def format_duration(ms: int | None) -> str:
    """Format a duration given in milliseconds.

    Examples:
        >>> format_duration(None)
        '?'
        >>> format_duration(250)
        '250ms'
        >>> format_duration(1500)
        '1.5s'
        >>> format_duration(125000)
        '2m 5s'
    """
    if ms is None:
        return "?"
    if ms < 1000:
        return f"{ms}ms"
    seconds = ms / 1000
    if seconds < 60:
        return f"{seconds:.1f}s"
    mins = int(seconds // 60)
    secs = seconds % 60
    return f"{mins}m {secs:.0f}s"


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    """Return ``"<count> <noun>"`` with the noun matching the count."""
    noun = singular if count == 1 else (plural or f"{singular}s")
    return f"{count} {noun}"


def summary_line(succeeded: int, failed: int, total: int) -> str:
    """Summary text shown after a loop."""
    if failed == 0:
        return f"All {pluralize(total, 'project')} completed successfully"
    return f"{succeeded}/{total} projects succeeded, {failed} failed"
