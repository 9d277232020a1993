"""Base schema configuration for all Pydantic models.

Every response schema inherits from ``APIResponse`` so that serialization is
consistently camelCase.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class APIResponse(BaseModel):
    """Base class for outgoing API response schemas.

    Configured to forbid extra fields - we should only return
    properties that are explicitly defined in the schema.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,  # Accept both snake_case and camelCase
        use_enum_values=True,
        validate_default=True,
        validate_assignment=True,
        serialize_by_alias=True,
        extra="forbid",
    )
