"""
Base schemas with standardized field naming for consistent API responses.

Wire payloads use camelCase (``peakSlots``, ``timeSlotId``); snake_case field
names are accepted on input as well.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class StandardizedModel(BaseModel):
    """Base model with camelCase aliases and enum values on the wire"""

    model_config = ConfigDict(
        use_enum_values=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )
