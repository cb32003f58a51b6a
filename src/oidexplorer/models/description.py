"""MIB and OID description ORM models."""

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from oidexplorer.models.base import Base


class Mib(Base):
    __tablename__ = "mibs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), unique=True)


class OidDescription(Base):
    __tablename__ = "oidDescriptions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    oid_id: Mapped[int] = mapped_column(
        "oid", Integer, ForeignKey("oids.id", ondelete="CASCADE"), index=True
    )
    mib_id: Mapped[int] = mapped_column(
        "mib", Integer, ForeignKey("mibs.id", ondelete="CASCADE")
    )
    description: Mapped[str] = mapped_column(Text)
