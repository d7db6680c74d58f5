from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RecordModel(BaseModel):
    """Base model for records persisted in the JSON collections.

    Fields are snake_case in Python and camelCase on disk and on the wire,
    matching the records written by the browser client.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )
