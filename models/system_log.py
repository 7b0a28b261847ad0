"""
SystemLog model - audit trail of account and institution administration.
"""
import enum
from sqlalchemy import Column, Integer, String, DateTime, Enum, JSON
from .base import Base, utc_now


class SystemAction(str, enum.Enum):
     """Administrative actions that leave an audit entry."""
     PASSWORD_CHANGED = "PASSWORD_CHANGED"
     PROFILE_UPDATED = "PROFILE_UPDATED"
     USER_UPDATED = "USER_UPDATED"
     USER_DELETED = "USER_DELETED"
     PASSWORD_RESET = "PASSWORD_RESET"
     INSTITUTION_UPDATED = "INSTITUTION_UPDATED"
     INSTITUTION_DELETED = "INSTITUTION_DELETED"


class SystemLog(Base):
     """
     One audit entry. User and institution ids are plain integers so the
     entry outlives the row it describes.
     """
     __tablename__ = "system_logs"

     id = Column(Integer, primary_key=True, autoincrement=True)
     action = Column(
          Enum(SystemAction, name="system_action", create_constraint=True),
          nullable=False,
          index=True
     )
     performed_by = Column(Integer, nullable=True)
     target_user_id = Column(Integer, nullable=True)
     target_email = Column(String(255), nullable=True)
     target_institution_id = Column(Integer, nullable=True)
     details = Column(JSON, nullable=True)
     ip_address = Column(String(64), nullable=True)
     created_at = Column(DateTime, default=utc_now, nullable=False, index=True)

     def __repr__(self):
          return f"<SystemLog(id={self.id}, action='{self.action.value}', performed_by={self.performed_by})>"
