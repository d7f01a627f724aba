from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class EngineModel(BaseModel):
    """Immutable value object shared by all engine inputs and outputs.

    Attributes are snake_case in Python and camelCase on the wire; either
    spelling is accepted when validating.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )
