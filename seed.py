# seed.py
"""
Demo data for local development.

1. Admin, institution and student logins (admin123 / institution123 / student123)
2. One institution and one enrolled student
3. One transcript issued to that student and anchored on the ledger

Seeding is skipped when the demo admin already exists, so running it twice is harmless.

Usage:
     python seed.py
"""
import logging

from sqlalchemy.orm import Session

from database import get_session_context, init_db
from models import Institution, LedgerAction, RecordType
from services import LedgerEntryDraft, LedgerStore, RecordDraft, RecordStore, StudentService, UserService

logger = logging.getLogger(__name__)

DEMO_ADMIN_EMAIL = "admin@university.edu"
DEMO_WALLET = "0x742d35Cc6634C0532925a3b844Bc9e7595f5bE91"
DEMO_STUDENT_WALLET = "0x8ba1f109551bD432803012645Ac136ddd64DBA72"


def seed_demo_data(db: Session) -> bool:
     """Insert the demo data set. Returns False if it was already present."""
     if UserService.get_by_email(db, DEMO_ADMIN_EMAIL) is not None:
          return False

     UserService.create_user(
          db,
          email=DEMO_ADMIN_EMAIL,
          password="admin123",
          name="System Administrator",
          role="admin",
          wallet_address=DEMO_WALLET,
     )

     institution = Institution(name="State University", code="SU001", wallet_address=DEMO_WALLET, verified=True)
     db.add(institution)
     db.flush()

     UserService.create_user(
          db,
          email="institution@university.edu",
          password="institution123",
          name="State University Admin",
          role="institution",
          wallet_address=DEMO_WALLET,
          institution_id=institution.id,
     )
     UserService.create_user(
          db,
          email="student@university.edu",
          password="student123",
          name="John Doe",
          role="student",
          wallet_address=DEMO_STUDENT_WALLET,
          student_id="STU2024001",
     )
     student = StudentService.register(
          db,
          student_id="STU2024001",
          name="John Doe",
          email="student@university.edu",
          course="Computer Science",
          department="Engineering",
          enrollment_year=2024,
          wallet_address=DEMO_STUDENT_WALLET,
          institution_id=institution.id,
     )

     record = RecordStore(db).create(RecordDraft(
          subject_entity_id=student.student_id,
          type=RecordType.TRANSCRIPT,
          title="Semester 1 Transcript",
          description="Academic transcript for semester 1",
          payload={"course": "Computer Science", "grade": "A", "year": 2024},
          issued_by=f"institution:{institution.id}",
     ))
     LedgerStore(db).append(LedgerEntryDraft(
          content_hash=record.content_hash,
          action=LedgerAction.STORE_RECORD,
          record_id=record.id,
          actor_address=DEMO_WALLET,
          record_type=record.type.value,
     ))

     logger.info("Demo data seeded (admin=%s, student=%s)", DEMO_ADMIN_EMAIL, student.student_id)
     return True


def main() -> None:
     init_db()
     with get_session_context() as db:
          seed_demo_data(db)


if __name__ == "__main__":
     logging.basicConfig(level=logging.INFO)
     main()
