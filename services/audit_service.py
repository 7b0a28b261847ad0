# services/audit_service.py
"""
Audit Service - system log of administrative actions.

Account changes (password, profile, role, deletion) and institution changes
are written here in the same transaction as the change itself.
"""
import logging
from typing import List, Optional

from sqlalchemy import desc
from sqlalchemy.orm import Session

from models import SystemAction, SystemLog

logger = logging.getLogger(__name__)

RECENT_LOG_LIMIT = 100


class AuditService:
     """Service class for the system log."""

     @staticmethod
     def record(
          db: Session,
          action: SystemAction,
          performed_by: Optional[int] = None,
          target_user_id: Optional[int] = None,
          target_email: Optional[str] = None,
          target_institution_id: Optional[int] = None,
          details: Optional[dict] = None,
          ip_address: Optional[str] = None
     ) -> SystemLog:
          entry = SystemLog(
               action=action,
               performed_by=performed_by,
               target_user_id=target_user_id,
               target_email=target_email,
               target_institution_id=target_institution_id,
               details=details,
               ip_address=ip_address,
          )
          db.add(entry)
          db.flush()
          logger.info("Audit %s by user %s (target user=%s, institution=%s)",
                      action.value, performed_by, target_user_id, target_institution_id)
          return entry

     @staticmethod
     def recent(db: Session, limit: int = RECENT_LOG_LIMIT) -> List[SystemLog]:
          """Most recent entries first."""
          return db.query(SystemLog).order_by(desc(SystemLog.id)).limit(limit).all()

     @staticmethod
     def count(db: Session) -> int:
          return db.query(SystemLog).count()
