"""Raw collection models.

A published Postman collection is a tree of items: folders carry an ``item``
list, requests carry a ``request``. These models keep only what the
generator reads and ignore everything else.
"""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class RequestField(BaseModel):
    """A query parameter or a form-data field."""

    model_config = ConfigDict(extra="ignore")

    key: str = ""
    description: str = ""  # free text; carries "required", "int", "string" hints

    @field_validator("key", mode="before")
    @classmethod
    def _null_key(cls, value):
        return "" if value is None else value

    @field_validator("description", mode="before")
    @classmethod
    def _flatten_description(cls, value):
        if value is None:
            return ""
        if isinstance(value, dict):  # {"content": "...", "type": "text/plain"}
            return value.get("content") or ""
        return value


class UrlObject(BaseModel):
    model_config = ConfigDict(extra="ignore")

    path: list[str] = []
    query: list[RequestField] = []


class RequestBody(BaseModel):
    model_config = ConfigDict(extra="ignore")

    mode: str | None = None  # raw / formdata / urlencoded / file
    formdata: list[RequestField] = []


class Request(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    method: str | None = None
    # The documenter gateway sends "urlObject"; exported collections use "url".
    url_object: UrlObject | None = Field(
        default=None,
        validation_alias=AliasChoices("urlObject", "url"),
    )
    body: RequestBody | None = None

    @field_validator("url_object", mode="before")
    @classmethod
    def _skip_raw_url(cls, value):
        # a bare string URL ("raw" only) has no path segments to read
        if isinstance(value, str):
            return None
        return value


class CollectionItem(BaseModel):
    """A folder (has ``item``) or a request (has ``request``)."""

    model_config = ConfigDict(extra="ignore")

    name: str = ""
    item: list[CollectionItem] | None = None
    request: Request | None = None

    @property
    def is_folder(self) -> bool:
        return self.item is not None


CollectionItem.model_rebuild()
