"""CycloneDX document schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class LicenseId(BaseModel):
    id: str


class LicenseChoice(BaseModel):
    license: LicenseId


class Component(BaseModel):
    """A single library entry in ``components``."""

    type: str = "library"
    name: str
    version: str
    licenses: list[LicenseChoice]
    purl: str


class Tool(BaseModel):
    vendor: str
    name: str
    version: str


class SubjectComponent(BaseModel):
    type: str = "application"
    name: str


class Metadata(BaseModel):
    timestamp: str
    tools: list[Tool]
    component: SubjectComponent | None = None


class CycloneDXDocument(BaseModel):
    """CycloneDX 1.5 bill of materials (JSON encoding)."""

    model_config = ConfigDict(populate_by_name=True)

    bom_format: str = Field(default="CycloneDX", alias="bomFormat")
    spec_version: str = Field(default="1.5", alias="specVersion")
    version: int = 1
    metadata: Metadata
    components: list[Component]

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
