"""
Tests for the demo data set.
"""
from seed import DEMO_ADMIN_EMAIL, seed_demo_data
from services import SubjectStatus, UserService


def test_seed_is_idempotent(db_session, ledger):
    assert seed_demo_data(db_session) is True
    assert seed_demo_data(db_session) is False
    assert UserService.get_by_email(db_session, DEMO_ADMIN_EMAIL).role == "admin"
    assert ledger.count() == 1


def test_seeded_transcript_verifies(db_session, engine):
    seed_demo_data(db_session)
    summary = engine.verify_subject("STU2024001")
    assert summary.status == SubjectStatus.ALL_VERIFIED
    assert summary.total == 1
