"""
Account ORM model.
One credential record per sign-in provider; "credential" accounts hold a bcrypt hash.
"""
from __future__ import annotations

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, IdMixin, TimestampMixin

CREDENTIAL_PROVIDER = "credential"


class Account(IdMixin, TimestampMixin, Base):
    __tablename__ = "accounts"

    account_id: Mapped[str] = mapped_column(String(255), nullable=False)
    provider_id: Mapped[str] = mapped_column(
        String(50), nullable=False, default=CREDENTIAL_PROVIDER
    )
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    password: Mapped[str | None] = mapped_column(String(255), nullable=True)

    user: Mapped["User"] = relationship(  # type: ignore[name-defined]  # noqa: F821
        "User",
        back_populates="accounts",
    )

    def __repr__(self) -> str:
        return f"<Account id={self.id} provider={self.provider_id} user_id={self.user_id}>"
