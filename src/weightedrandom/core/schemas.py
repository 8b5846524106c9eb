from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "WeightedEntryPayload",
    "DistributionRow",
    "DistributionPayload",
]


class _ExportModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class WeightedEntryPayload(_ExportModel):
    value: Any
    weight: float = Field(gt=0)


class DistributionRow(_ExportModel):
    value: Any
    weight: float | None = None
    probability: float = Field(ge=0.0)


class DistributionPayload(_ExportModel):
    rows: list[DistributionRow]
    total_weight: float = Field(alias="totalWeight")
    entropy: float
    expected_value: float | None = Field(default=None, alias="expectedValue")
    variance: float | None = None
    standard_deviation: float | None = Field(default=None, alias="standardDeviation")
