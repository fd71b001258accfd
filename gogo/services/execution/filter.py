"""
Directory filtering for loops over manifest projects.

apply_filters() is pure and never fails; everything that can fail (regex
compilation) happens when raw command-line text is turned into a FilterSpec.
"""

from __future__ import annotations

import posixpath
import re
from collections.abc import Iterable, Sequence

from ...core.exceptions import FilterPatternError
from ...core.models.execution import FilterSpec


def _basename(path: str) -> str:
    return posixpath.basename(path.replace("\\", "/").rstrip("/"))


def _in_set(path: str, names: frozenset[str]) -> bool:
    return path in names or _basename(path) in names


def apply_filters(directories: Sequence[str], spec: FilterSpec) -> list[str]:
    """Return the directories selected by ``spec``, in their original order.

    Names in include/exclude sets that match no directory are ignored.
    """
    result = list(directories)

    if spec.include_only:
        result = [d for d in result if _in_set(d, spec.include_only)]

    if spec.exclude_only:
        result = [d for d in result if not _in_set(d, spec.exclude_only)]

    if spec.include_pattern is not None:
        result = [d for d in result if spec.include_pattern.search(d)]

    if spec.exclude_pattern is not None:
        result = [d for d in result if not spec.exclude_pattern.search(d)]

    return result


def filter_from_loop_rc(directories: Sequence[str], ignore: Iterable[str]) -> list[str]:
    """Drop directories listed (by path or basename) in a .looprc ignore list."""
    ignore_set = frozenset(ignore)
    if not ignore_set:
        return list(directories)
    return [d for d in directories if not _in_set(d, ignore_set)]


def parse_filter_list(value: str | Iterable[str] | None) -> frozenset[str] | None:
    """Parse a comma-separated list (or an iterable of names) into a set.

    Blank entries are dropped. Returns None when nothing remains.
    """
    if not value:
        return None
    items = value.split(",") if isinstance(value, str) else value
    names = frozenset(s.strip() for s in items if s and s.strip())
    return names or None


def parse_filter_pattern(value: str | None) -> re.Pattern[str] | None:
    """Compile a filter regex.

    Raises:
        FilterPatternError: If the pattern is not a valid regular expression
    """
    if not value:
        return None
    try:
        return re.compile(value)
    except re.error as e:
        raise FilterPatternError(value, cause=e) from e


def create_filter_spec(
    include_only: str | Iterable[str] | None = None,
    exclude_only: str | Iterable[str] | None = None,
    include_pattern: str | None = None,
    exclude_pattern: str | None = None,
) -> FilterSpec:
    """Build a FilterSpec from raw command-line or manifest values."""
    return FilterSpec(
        include_only=parse_filter_list(include_only),
        exclude_only=parse_filter_list(exclude_only),
        include_pattern=parse_filter_pattern(include_pattern),
        exclude_pattern=parse_filter_pattern(exclude_pattern),
    )


def merge_filter_specs(override: FilterSpec, default: FilterSpec) -> FilterSpec:
    """Combine two specs field by field, preferring ``override``."""
    return FilterSpec(
        include_only=override.include_only if override.include_only is not None else default.include_only,
        exclude_only=override.exclude_only if override.exclude_only is not None else default.exclude_only,
        include_pattern=(
            override.include_pattern if override.include_pattern is not None else default.include_pattern
        ),
        exclude_pattern=(
            override.exclude_pattern if override.exclude_pattern is not None else default.exclude_pattern
        ),
    )
