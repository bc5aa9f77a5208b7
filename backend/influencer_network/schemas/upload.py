"""Upload payloads."""

from pydantic import Field

from influencer_network.schemas.common import CamelModel


class StoredFile(CamelModel):
    path: str = Field(description="Path relative to the storage root")
    url: str = Field(description="API path that serves the file")
    size: int
    content_type: str
    original_name: str


class StoredFileData(CamelModel):
    file: StoredFile
