"""Wire Base Model — camelCase on the wire, snake_case in Python.

Invariants:
    - Every request/response schema inherits CamelModel
    - Responses are produced with to_wire() (aliases + JSON-safe values)
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def to_wire(model: BaseModel) -> dict:
    return model.model_dump(by_alias=True, mode="json")
