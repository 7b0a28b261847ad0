"""
Tests for record and student verification against the ledger.
"""
import pytest

from models import LedgerAction, RecordType
from services import (
    LedgerEntryDraft,
    RecordDraft,
    SubjectStatus,
    VerificationEngine,
    VerificationReason,
)


def issue(records, subject="STU001", payload=None):
    return records.create(RecordDraft(
        subject_entity_id=subject,
        type=RecordType.TRANSCRIPT,
        title="Transcript",
        payload={"grade": "A"} if payload is None else payload,
    ))


def anchor(ledger, record, content_hash=None):
    return ledger.append(LedgerEntryDraft(
        content_hash=content_hash or record.content_hash,
        action=LedgerAction.STORE_RECORD,
        record_id=record.id,
        record_type=record.type.value,
    ))


def issue_and_anchor(records, ledger, **kwargs):
    record = issue(records, **kwargs)
    anchor(ledger, record)
    return record


class TestVerifyRecord:

    def test_anchored_record_verifies(self, records, ledger, engine):
        record = issue(records)
        entry = anchor(ledger, record)
        result = engine.verify(record.id)
        assert result.verified is True
        assert result.tampered is False
        assert result.reason == VerificationReason.VERIFIED
        assert result.ledger_hash == record.content_hash
        assert result.transaction_id == entry.transaction_id

    def test_corrupted_stored_hash_is_tampered(self, db_session, records, ledger, engine):
        record = issue_and_anchor(records, ledger)
        record.content_hash = "f" * 64
        db_session.flush()
        result = engine.verify(record.id)
        assert result.verified is False
        assert result.tampered is True
        assert result.reason == VerificationReason.HASH_MISMATCH

    def test_payload_edited_in_storage_is_tampered(self, db_session, records, ledger, engine):
        record = issue_and_anchor(records, ledger)
        record.payload = {"grade": "A+"}
        db_session.flush()
        result = engine.verify(record.id)
        assert result.verified is False
        assert result.tampered is True
        assert result.reason == VerificationReason.STORAGE_CORRUPTION

    def test_unanchored_record_accepted_by_default(self, records, engine):
        record = issue(records)
        result = engine.verify(record.id)
        assert result.verified is True
        assert result.unanchored is True
        assert result.tampered is False
        assert result.reason == VerificationReason.UNANCHORED

    def test_unanchored_record_rejected_under_reject_policy(self, records, ledger):
        record = issue(records)
        result = VerificationEngine(records, ledger, unanchored_policy="reject").verify(record.id)
        assert result.verified is False
        assert result.unanchored is True
        assert result.tampered is False

    def test_missing_record_is_negative_result(self, engine):
        result = engine.verify(4242)
        assert result.verified is False
        assert result.tampered is False
        assert result.reason == VerificationReason.RECORD_NOT_FOUND

    def test_latest_ledger_entry_wins(self, records, ledger, engine):
        record = issue(records)
        anchor(ledger, record, content_hash="0" * 64)
        assert engine.verify(record.id).reason == VerificationReason.HASH_MISMATCH
        anchor(ledger, record)
        assert engine.verify(record.id).verified is True

    def test_title_edit_does_not_break_verification(self, records, ledger, engine):
        record = issue_and_anchor(records, ledger)
        records.update_metadata(record.id, {"title": "Renamed"})
        result = engine.verify(record.id)
        assert result.verified is True
        assert result.title == "Renamed"

    def test_verification_is_idempotent(self, records, ledger, engine):
        record = issue_and_anchor(records, ledger)
        entries_before = ledger.count()
        assert engine.verify(record.id) == engine.verify(record.id)
        assert ledger.count() == entries_before

    def test_unknown_policy_rejected(self, records, ledger):
        with pytest.raises(ValueError):
            VerificationEngine(records, ledger, unanchored_policy="maybe")


class TestVerifySubject:

    def test_no_records(self, engine):
        summary = engine.verify_subject("STU404")
        assert summary.status == SubjectStatus.NO_RECORDS
        assert summary.verified is True
        assert summary.total == 0

    def test_all_verified(self, records, ledger, engine):
        for _ in range(3):
            issue_and_anchor(records, ledger)
        issue_and_anchor(records, ledger, subject="STU002")
        summary = engine.verify_subject("STU001")
        assert summary.total == 3
        assert summary.verified is True
        assert summary.status == SubjectStatus.ALL_VERIFIED
        assert summary.tampered_count == 0

    def test_one_tampered_record_fails_the_subject(self, db_session, records, ledger, engine):
        good = [issue_and_anchor(records, ledger) for _ in range(3)]
        good[1].content_hash = "e" * 64
        db_session.flush()
        summary = engine.verify_subject("STU001")
        assert summary.total == 3
        assert summary.tampered_count == 1
        assert summary.verified is False
        assert summary.status == SubjectStatus.TAMPERED
        assert summary.message == "Warning: Some records may have been tampered with!"

    def test_unanchored_under_reject_policy_is_unverified(self, records, ledger):
        issue_and_anchor(records, ledger)
        issue(records)
        summary = VerificationEngine(records, ledger, unanchored_policy="reject").verify_subject("STU001")
        assert summary.verified is False
        assert summary.status == SubjectStatus.UNVERIFIED
        assert summary.unanchored_count == 1
