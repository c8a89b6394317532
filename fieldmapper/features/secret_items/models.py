"""
Stored form of a secret item.
"""
from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column
import ulid

from fieldmapper.core.database.base import Base, TimestampMixin
from fieldmapper.features.entities.descriptors import acl


def generate_ulid() -> str:
    """Generate a new ULID string."""
    return ulid.ulid()


class SecretItemRecord(Base, TimestampMixin):
    """
    Secret item row.

    Same ACLs as SecretItem; the id and timestamps carry none and are never
    copied by the mapper.
    """
    __tablename__ = "secret_items"

    id: Mapped[str] = mapped_column(String(26), primary_key=True, default=generate_ulid)

    name: Mapped[str] = mapped_column(String(255), nullable=False, info=acl("staff:r;developer:rw;admin:rw"))
    comment: Mapped[str] = mapped_column(Text, nullable=False, info=acl("staff:rw;developer:rw;admin:rw"))
    secret_info: Mapped[str] = mapped_column(Text, nullable=False, info=acl("developer:r;admin:rw"))
    top_secret: Mapped[str] = mapped_column(Text, nullable=False, info=acl("admin:rw"))
    can_only_be_written_to: Mapped[str] = mapped_column(
        Text, nullable=False, info=acl("staff:w;developer:w;admin:rw")
    )

    def __repr__(self) -> str:
        return f"<SecretItemRecord(id={self.id}, name={self.name!r})>"
