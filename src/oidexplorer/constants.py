"""Shared constants: single source of truth for cross-module values."""

from __future__ import annotations

from enum import StrEnum


class SearchType(StrEnum):
    """Field a keyword search matches against (``?type=`` on /oids)."""

    OID = "oid"
    NAME = "name"
    ANY = "any"


# Health check component states
DB_CONNECTED = "connected"
DB_DISCONNECTED = "disconnected"

INTERNAL_ERROR_MESSAGE = "internal server error"
