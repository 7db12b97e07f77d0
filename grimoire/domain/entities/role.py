"""
Role and UserRole Entities

Named roles and their assignment to users.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from grimoire.domain.base import utcnow


class Role(SQLModel, table=True):
    """Role entity - a named set of permissions (USER, ADMIN)"""

    __tablename__ = "roles"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(unique=True, index=True, max_length=50)
    description: str = Field(default="", max_length=255)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))


class UserRole(SQLModel, table=True):
    """Assignment of a role to a user"""

    __tablename__ = "user_roles"

    user_id: UUID = Field(foreign_key="users.id", primary_key=True, ondelete="CASCADE")
    role_id: UUID = Field(foreign_key="roles.id", primary_key=True, ondelete="CASCADE")

    assigned_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
