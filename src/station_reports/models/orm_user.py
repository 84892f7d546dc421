"""
SQLAlchemy ORM Models: User, Role, RolePermission
Accounts created by the first-run setup wizard.
"""

from sqlalchemy import String, Integer, ForeignKey, Table, Column, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from werkzeug.security import generate_password_hash, check_password_hash
from .base import Base
from datetime import datetime
from typing import List, Optional


user_has_role = Table(
    "user_has_role",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.uid", ondelete="CASCADE"), primary_key=True),
    Column("role_id", Integer, ForeignKey("role.id", ondelete="CASCADE"), primary_key=True),
    extend_existing=True,
)


class Role(Base):
    __tablename__ = "role"
    __table_args__ = {'extend_existing': True}

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    permissions: Mapped[List["RolePermission"]] = relationship(
        "RolePermission",
        back_populates="role",
        cascade="all, delete-orphan"
    )
    users: Mapped[List["User"]] = relationship(
        "User",
        secondary=user_has_role,
        back_populates="roles"
    )

    def __repr__(self) -> str:
        return f"<Role(id={self.id}, name='{self.name}')>"


class RolePermission(Base):
    __tablename__ = "role_permissions"
    __table_args__ = {'extend_existing': True}

    id: Mapped[int] = mapped_column(primary_key=True)
    role_id: Mapped[int] = mapped_column(ForeignKey("role.id", ondelete="CASCADE"), nullable=False)
    station_id: Mapped[Optional[int]] = mapped_column(ForeignKey("station.id", ondelete="CASCADE"))
    action_name: Mapped[str] = mapped_column(String(50), nullable=False)

    role: Mapped["Role"] = relationship("Role", back_populates="permissions")


class User(Base):
    __tablename__ = "users"
    __table_args__ = {'extend_existing': True}

    uid: Mapped[int] = mapped_column(primary_key=True)
    email: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    auth_password: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[Optional[str]] = mapped_column(String(100))

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now()
    )

    roles: Mapped[List["Role"]] = relationship(
        "Role",
        secondary=user_has_role,
        back_populates="users"
    )

    def set_password(self, password: str):
        self.auth_password = generate_password_hash(password)

    def verify_password(self, password: str) -> bool:
        return check_password_hash(self.auth_password, password)

    def __repr__(self) -> str:
        return f"<User(uid={self.uid}, email='{self.email}')>"
