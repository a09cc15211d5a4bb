"""Pydantic models describing the Wegwijs organisation search payloads."""

from __future__ import annotations

import json
from logging import getLogger

from pydantic import BaseModel, ConfigDict, Field, field_validator

log = getLogger(__name__)

SEARCH_METADATA_HEADER = "x-search-metadata"


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class WegwijsBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class WegwijsLabel(WegwijsBaseModel):
    label_type_name: str | None = Field(default=None, alias="labelTypeName")
    value: str


class WegwijsContact(WegwijsBaseModel):
    contact_type_name: str | None = Field(default=None, alias="contactTypeName")
    value: str


class WegwijsClassification(WegwijsBaseModel):
    type_name: str | None = Field(default=None, alias="organisationClassificationTypeName")
    name: str = Field(alias="organisationClassificationName")


class WegwijsLocation(WegwijsBaseModel):
    formatted_address: str | None = Field(default=None, alias="formattedAddress")
    is_main_location: bool = Field(default=False, alias="isMainLocation")


class WegwijsOrganisation(WegwijsBaseModel):
    kbo_number: str | None = Field(default=None, alias="kboNumber")
    ovo_number: str | None = Field(default=None, alias="ovoNumber")
    name: str | None = None
    short_name: str | None = Field(default=None, alias="shortName")
    change_time: str | None = Field(default=None, alias="changeTime")
    labels: list[WegwijsLabel] | None = None
    contacts: list[WegwijsContact] | None = None
    classifications: list[WegwijsClassification] | None = Field(
        default=None, alias="organisationClassifications"
    )
    locations: list[WegwijsLocation] | None = None

    _normalize_identifiers = field_validator(
        "kbo_number", "ovo_number", "change_time", mode="before"
    )(_blank_to_none)


class SearchMetadata(WegwijsBaseModel):
    scroll_id: str | None = Field(default=None, alias="scrollId")
    total_items: int | None = Field(default=None, alias="totalItems")

    @classmethod
    def from_header(cls, raw: str) -> SearchMetadata:
        return cls.model_validate(json.loads(raw))
