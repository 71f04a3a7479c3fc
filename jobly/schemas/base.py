from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base schema exposing snake_case fields under camelCase JSON names.

    Repository rows already use camelCase keys, so responses validate from
    them directly and serialize back by alias.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UpdateModel(CamelModel):
    """Base schema for PATCH bodies; unknown fields are rejected."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


def reject_null(value):
    """Field validator body for PATCH fields whose columns are NOT NULL."""
    if value is None:
        raise ValueError("may not be null")
    return value
