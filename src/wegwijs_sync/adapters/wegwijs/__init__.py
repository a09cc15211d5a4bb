"""Wegwijs organisation registry adapter."""

from __future__ import annotations

from .client import WegwijsClient
from .fetcher import WegwijsSnapshotFetcher
from .schema import WegwijsOrganisation
from .translator import translate_organisation

__all__ = [
    "WegwijsClient",
    "WegwijsOrganisation",
    "WegwijsSnapshotFetcher",
    "translate_organisation",
]
