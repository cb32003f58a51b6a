"""SQLAlchemy ORM models."""

from oidexplorer.models.base import Base
from oidexplorer.models.description import Mib, OidDescription
from oidexplorer.models.oid import OidRecord

__all__ = [
    "Base",
    "Mib",
    "OidDescription",
    "OidRecord",
]
