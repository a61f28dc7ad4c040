"""ORM models for user accounts and their roles."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Table, func
from sqlalchemy.orm import relationship

from ebookshare.models.base import Base

ROLE_NAMES = ("user", "moderator", "admin")

user_roles = Table(
    "user_roles",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", Integer, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
)

# The user's list of owned eBooks; authoritative for cascade deletes.
user_uploaded_books = Table(
    "user_uploaded_books",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("ebook_id", Integer, ForeignKey("ebooks.id", ondelete="CASCADE"), primary_key=True),
)


class Role(Base):
    """Reference row for a role name ('user', 'moderator', 'admin')."""

    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(32), nullable=False, unique=True)


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    password_hash is a bcrypt digest; the plain password is never stored.
    """

    __tablename__ = "users"
    # Deleted ids are never handed to a new account; tokens carry the id.
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    roles = relationship("Role", secondary=user_roles, lazy="selectin", order_by="Role.id")
    uploaded_books = relationship(
        "Ebook",
        secondary=user_uploaded_books,
        order_by="Ebook.id",
    )

    @property
    def role_names(self) -> list[str]:
        return [role.name for role in self.roles]

    @property
    def is_admin(self) -> bool:
        return "admin" in self.role_names
