"""Marshmallow schemas for reporting finalized statistics.

Undefined statistics (NaN, or infinities fed in as values) dump as ``None`` so
payloads are strict JSON; ``None`` loads back as NaN.
"""

import math
from typing import Any

import marshmallow as ma

from .accumulators import MomentSummary
from .summary import StreamSummary


def _float() -> ma.fields.Float:
    """Float field that tolerates NaN and infinities from degenerate streams."""
    return ma.fields.Float(required=True, allow_nan=True)


def _nan_to_none(value: Any) -> Any:
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, list):
        return [_nan_to_none(item) for item in value]
    return value


def _none_to_nan(value: Any) -> Any:
    if value is None:
        return math.nan
    if isinstance(value, list):
        return [_none_to_nan(item) for item in value]
    return value


class _StatisticsSchema(ma.Schema):
    """Base schema mapping NaN statistics to and from JSON ``null``."""

    FLOAT_FIELDS: tuple[str, ...] = ()

    @ma.post_dump
    def nan_to_null(self, data: dict[str, Any], **kwargs: object) -> dict[str, Any]:
        """Replace non-finite floats with ``None``."""
        return {
            key: _nan_to_none(value) if key in self.FLOAT_FIELDS else value
            for key, value in data.items()
        }

    @ma.pre_load
    def null_to_nan(self, data: dict[str, Any], **kwargs: object) -> dict[str, Any]:
        """Read ``None`` statistics back as NaN."""
        return {
            key: _none_to_nan(value) if key in self.FLOAT_FIELDS else value
            for key, value in data.items()
        }


class MomentSummarySchema(_StatisticsSchema):
    """Marshmallow schema for :class:`MomentSummary`."""

    FLOAT_FIELDS = ("moments", "mean")

    order = ma.fields.Int(required=True)
    standardized = ma.fields.Bool(required=True)
    moments = ma.fields.List(ma.fields.Float(allow_nan=True), required=True)
    mean = _float()

    @ma.post_load
    def make_moment_summary(self, data: dict[str, Any], **kwargs: object) -> MomentSummary:
        """Instantiate :class:`MomentSummary` from validated payloads."""
        return MomentSummary(**data)


class StreamSummarySchema(_StatisticsSchema):
    """Marshmallow schema for :class:`StreamSummary`."""

    FLOAT_FIELDS = (
        "total_weight",
        "mean",
        "variance",
        "std",
        "skewness",
        "kurtosis",
        "minimum",
        "maximum",
        "moments",
    )

    count = ma.fields.Int(required=True)
    total_weight = _float()
    mean = _float()
    variance = _float()
    std = _float()
    skewness = _float()
    kurtosis = _float()
    minimum = _float()
    maximum = _float()
    order = ma.fields.Int(required=True)
    standardized = ma.fields.Bool(required=True)
    moments = ma.fields.List(ma.fields.Float(allow_nan=True), required=True)

    @ma.post_load
    def make_stream_summary(self, data: dict[str, Any], **kwargs: object) -> StreamSummary:
        """Instantiate :class:`StreamSummary` with a tuple moment vector."""
        return StreamSummary(**{**data, "moments": tuple(data["moments"])})


__all__ = ["MomentSummarySchema", "StreamSummarySchema"]
