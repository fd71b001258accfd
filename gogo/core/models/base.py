"""
Base Pydantic models for gogo.

Execution results cross thread boundaries in parallel runs, so everything
produced by the engine derives from ImmutableModel. Manifest and settings
models use the relaxed ConfigBaseModel in config.py instead.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class GogoBaseModel(BaseModel):
    """Strict base: no implicit coercion, unknown fields rejected, aliases accepted."""

    model_config = ConfigDict(
        strict=True,
        validate_assignment=True,
        extra="forbid",
        populate_by_name=True,
        use_enum_values=True,
        revalidate_instances="never",
    )


class ImmutableModel(GogoBaseModel):
    """Frozen, hashable value objects (outcomes, results, reports, filter specs)."""

    model_config = ConfigDict(
        frozen=True,
        strict=True,
        extra="forbid",
        populate_by_name=True,
        use_enum_values=True,
        revalidate_instances="never",
    )
