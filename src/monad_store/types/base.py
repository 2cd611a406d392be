"""Strict base model shared by configuration and parameter tables."""

from pydantic import BaseModel, ConfigDict


class StrictBaseModel(BaseModel):
    """
    A strict, immutable pydantic base model.

    Fields may declare an alias matching the on-disk configuration key
    (for example `datadir`). Models can still be built from field names.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        validate_default=True,
        arbitrary_types_allowed=True,
        extra="forbid",
        frozen=True,
        strict=True,
    )
