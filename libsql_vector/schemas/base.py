"""
Base Pydantic schemas
"""

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """
    Base schema with common configuration
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        use_enum_values=False,  # Return enum objects, not string values
    )


class FrozenSchema(BaseSchema):
    """
    Immutable schema for configuration shared across concurrent calls
    """

    model_config = ConfigDict(frozen=True)
