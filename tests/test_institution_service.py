"""
Tests for institution administration.
"""
import pytest

from models import LedgerAction, RecordType, Student, SystemAction, User
from services import (
    AuditService,
    DuplicateInstitutionError,
    InstitutionNotFoundError,
    InstitutionService,
    LedgerEntryDraft,
    RecordDraft,
    StudentService,
    VerificationReason,
)


class TestCreate:

    def test_create_unverified_by_default(self, db_session):
        institution = InstitutionService.create(db_session, name="North College", code="NC")
        assert institution.verified is False
        assert InstitutionService.get_by_code(db_session, "NC").id == institution.id

    def test_duplicate_code(self, db_session, institution):
        with pytest.raises(DuplicateInstitutionError):
            InstitutionService.create(db_session, name="Other", code="TU")


class TestUpdate:

    def test_verify_institution(self, db_session):
        institution = InstitutionService.create(db_session, name="North College", code="NC")
        InstitutionService.update(db_session, institution.id, {"verified": True}, performed_by=1)

        assert institution.verified is True
        assert InstitutionService.count(db_session, verified=True) == 1
        log = AuditService.recent(db_session)[0]
        assert log.action == SystemAction.INSTITUTION_UPDATED
        assert log.target_institution_id == institution.id
        assert log.details == {"verified": True}

    def test_code_taken_by_another(self, db_session, institution):
        other = InstitutionService.create(db_session, name="North College", code="NC")
        with pytest.raises(DuplicateInstitutionError):
            InstitutionService.update(db_session, other.id, {"code": "TU"}, performed_by=1)

    def test_unknown_field(self, db_session, institution):
        with pytest.raises(ValueError):
            InstitutionService.update(db_session, institution.id, {"id": 7}, performed_by=1)

    def test_missing_institution(self, db_session):
        with pytest.raises(InstitutionNotFoundError):
            InstitutionService.update(db_session, 999, {"name": "X"}, performed_by=1)


class TestDelete:

    def test_students_and_users_are_detached(self, db_session, institution, institution_headers):
        student = StudentService.register(
            db_session, student_id="STU001", name="Jane", email="jane@tu.test", institution_id=institution.id
        )
        InstitutionService.delete(db_session, institution.id, performed_by=1)

        assert InstitutionService.get(db_session, institution.id) is None
        assert student.institution_id is None
        assert db_session.query(Student).filter(Student.institution_id.isnot(None)).count() == 0
        assert db_session.query(User).filter(User.institution_id.isnot(None)).count() == 0
        log = AuditService.recent(db_session)[0]
        assert log.action == SystemAction.INSTITUTION_DELETED
        assert log.details == {"name": "Test University"}

    def test_issued_records_and_ledger_survive(self, db_session, institution, records, ledger, engine):
        record = records.create(RecordDraft(
            subject_entity_id="STU001",
            type=RecordType.DEGREE,
            title="BSc",
            payload={"class": "first"},
            issued_by=f"institution:{institution.id}",
        ))
        ledger.append(LedgerEntryDraft(
            content_hash=record.content_hash,
            action=LedgerAction.STORE_RECORD,
            record_id=record.id,
            record_type=record.type.value,
        ))

        InstitutionService.delete(db_session, institution.id, performed_by=1)

        assert records.count() == 1
        assert ledger.count() == 1
        assert engine.verify(record.id).reason == VerificationReason.VERIFIED

    def test_missing_institution(self, db_session):
        with pytest.raises(InstitutionNotFoundError):
            InstitutionService.delete(db_session, 999, performed_by=1)
