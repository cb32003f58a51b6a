"""OID node ORM model: one row per node, self-referencing its parent."""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from oidexplorer.models.base import Base


class OidRecord(Base):
    __tablename__ = "oids"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    oid: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255))
    object_type: Mapped[str | None] = mapped_column(
        "objectType", String(100), nullable=True
    )
    parent_id: Mapped[int | None] = mapped_column(
        "parent",
        Integer,
        ForeignKey("oids.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
