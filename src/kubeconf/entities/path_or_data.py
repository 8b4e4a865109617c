from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class PathRef(BaseModel):
    """Credential material stored in a file"""

    kind: Literal["path"] = "path"
    path: str

    model_config = ConfigDict(frozen=True)


class RawData(BaseModel):
    """Credential material decoded from an inline `*-data` field"""

    kind: Literal["data"] = "data"
    data: bytes

    model_config = ConfigDict(frozen=True)

    def __repr__(self) -> str:
        return f"RawData(<{len(self.data)} bytes>)"


PathOrData = Annotated[Union[PathRef, RawData], Field(discriminator="kind")]
