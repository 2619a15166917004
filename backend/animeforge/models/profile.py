import enum
from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, Text, Enum, UniqueConstraint

from animeforge.db.base import Base


class AppRole(str, enum.Enum):
    admin = "admin"
    creator = "creator"
    patron = "patron"


class Profile(Base):
    __tablename__ = "profiles"

    # same id as the auth provider's user
    id = Column(String(64), primary_key=True)
    display_name = Column(String(255), nullable=True)
    avatar_url = Column(String(1024), nullable=True)
    bio = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class UserRole(Base):
    __tablename__ = "user_roles"
    __table_args__ = (UniqueConstraint("user_id", "role", name="uq_user_roles_user_role"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(64), index=True, nullable=False)
    role = Column(Enum(AppRole), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
