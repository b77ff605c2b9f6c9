"""Parsed Content-Type value."""

from typing import Dict, Optional

from pydantic import BaseModel, Field


class MediaType(BaseModel):
    """A Content-Type decomposed into type/subtype and parameters."""

    mediatype: str = Field(description="Lowercased type/subtype, e.g. text/plain")
    params: Dict[str, str] = Field(
        default_factory=dict, description="Parameters with lowercased names"
    )

    model_config = {"frozen": True}

    @property
    def maintype(self) -> str:
        return self.mediatype.split("/", 1)[0]

    @property
    def subtype(self) -> str:
        return self.mediatype.split("/", 1)[1]

    def param(self, name: str) -> Optional[str]:
        return self.params.get(name.lower())

    @property
    def charset(self) -> Optional[str]:
        return self.param("charset")

    @property
    def boundary(self) -> Optional[str]:
        return self.param("boundary")

    def is_multipart(self) -> bool:
        return self.maintype == "multipart"

    def is_text(self) -> bool:
        return self.maintype == "text"
