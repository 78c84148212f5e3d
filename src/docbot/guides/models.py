"""Published guide format shared by the generator and the viewer."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

GUIDE_FORMAT_VERSION = "1.0.0"


class _CamelModel(BaseModel):
    # Guide files use camelCase keys
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GuideMetadata(_CamelModel):
    id: str
    title: str
    description: str
    category: str
    tags: list[str] = Field(default_factory=list)
    created_at: str
    updated_at: str
    version: str = GUIDE_FORMAT_VERSION


class GuideStep(_CamelModel):
    order: int = Field(ge=1)
    title: str
    description: str
    screenshot: str | None = None
    action: str | None = None
    selector: str | None = None


class Guide(_CamelModel):
    metadata: GuideMetadata
    steps: list[GuideStep] = Field(default_factory=list)

    @property
    def id(self) -> str:
        return self.metadata.id

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=2)


class GeneratedGuide(BaseModel):
    """Paths of the artifacts written for one successful recording."""

    markdown_path: str
    json_path: str
    meta_path: str
