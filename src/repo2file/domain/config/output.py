"""Output configuration model."""

import codecs

from pydantic import BaseModel, ConfigDict, field_validator


class OutputConfig(BaseModel):
    """Configuration for reading sources and writing the output file.

    Attributes:
        encoding: Text encoding used for both reading files and writing output
    """

    encoding: str = "utf-8"

    model_config = ConfigDict(extra="forbid")

    @field_validator("encoding")
    @classmethod
    def _known_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError:
            raise ValueError(f"unknown encoding: {value}")
        return value
