from datetime import datetime
from uuid import UUID, uuid4
from sqlalchemy import String, Text, DateTime, func, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.shared.database.database import Base


class ClientEntity(Base):
    """SQLAlchemy model for Client table."""
    __tablename__ = "clients"
    # Constraint names carry the column name; conflict detection relies on it.
    __table_args__ = (
        UniqueConstraint("email", name="clients_email_key"),
        UniqueConstraint("business_name", name="clients_business_name_key"),
    )

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(String(100))
    # Unbounded: validation caps only the name length
    email: Mapped[str] = mapped_column(Text)
    business_name: Mapped[str] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        index=True,
    )
