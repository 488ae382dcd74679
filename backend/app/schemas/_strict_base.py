"""Strict schema baselines with forbidden extras by default."""

from pydantic import ConfigDict
from pydantic.alias_generators import to_camel

from .base import StandardizedModel


class StrictModel(StandardizedModel):
    """Neutral strict base for response DTOs."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)


class StrictRequestModel(StrictModel):
    """Request DTO base that always forbids unexpected fields."""

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )
