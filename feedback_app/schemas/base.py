"""Shared Pydantic base for API payloads.

Python code uses snake_case; the JSON wire format uses camelCase.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase JSON keys.

    Fields may also be populated by their Python names, and models can be
    built straight from ORM objects.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
    )
