"""User model — registered account that can belong to several managers."""

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class User(Base):
    """Registered user identified by a unique email address.

    Users are created at registration and never updated or deleted.

    Attributes:
        id: Primary key.
        email: Unique email address used to log in.
        name: Display name.
        password_hash: Bcrypt-hashed password (never store plain text).
        created_at: Record creation timestamp.
    """

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(200), unique=True, nullable=False)
    name = Column(String(200), nullable=False)
    password_hash = Column(String(200), nullable=False)
    created_at = Column(DateTime, default=func.now(), nullable=False)

    # Relationships
    memberships = relationship(
        "Membership", back_populates="user", lazy="select"
    )
