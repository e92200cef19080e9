"""Track listing models for the androidpublisher ``edits.tracks.list`` response."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_serializer, model_serializer


class ApiModel(BaseModel):
    """Base for API payload models.

    Serialization writes back only the fields the payload carried: declared
    fields that were filled from defaults are dropped, extra fields are kept.
    """

    model_config = {"populate_by_name": True, "frozen": True, "extra": "allow"}

    @model_serializer(mode="wrap")
    def serialize_as_sent(self, handler) -> Dict[str, Any]:
        data = handler(self)
        for name, field in type(self).model_fields.items():
            if name in self.model_fields_set:
                continue
            data.pop(name, None)
            if field.alias:
                data.pop(field.alias, None)
        return data


class Release(ApiModel):
    """
    A release within a track.

    A release may carry several version codes (split / multi-APK releases).
    The API encodes int64 values as JSON strings; they are parsed to ``int``
    and written back as strings so the response round-trips unchanged.

    Fields the tool does not interpret (``status``, ``userFraction``,
    ``releaseNotes``, ...) are kept as extra fields.
    """

    name: str = Field(default="", description="Release display name")
    version_codes: List[int] = Field(
        default_factory=list,
        alias="versionCodes",
        description="Version codes of the artifacts in this release",
    )

    @field_serializer("version_codes")
    def serialize_version_codes(self, codes: List[int]) -> List[str]:
        return [str(code) for code in codes]


class Track(ApiModel):
    """A named distribution channel (production, beta, alpha, internal, or custom)."""

    track: str = Field(default="", description="Track name")
    releases: List[Release] = Field(default_factory=list)


class TrackListing(ApiModel):
    """Ordered tracks of one application, as returned by the API."""

    kind: Optional[str] = None
    tracks: List[Track] = Field(default_factory=list)

    @classmethod
    def from_response(cls, response: Optional[Dict[str, Any]]) -> "TrackListing":
        return cls.model_validate(response or {})

    def to_json_value(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class SelectionResult(BaseModel):
    """Highest version code found under a track predicate.

    The zero value (empty strings, code 0) means nothing matched; its JSON form
    omits those fields and renders as ``{}``.
    """

    model_config = {"frozen": True}

    track: str = ""
    name: str = ""
    code: int = 0

    def to_json_value(self) -> Dict[str, Any]:
        return {key: value for key, value in self.model_dump().items() if value}

    @property
    def found(self) -> bool:
        return self.code != 0
