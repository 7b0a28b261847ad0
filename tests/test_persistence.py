"""
Issued records verify after a commit and a reload from a different session.

Everything read back here comes from the database, not from objects cached
in the issuing session's identity map.
"""
import pytest

from models import LedgerAction, Record, RecordType
from services import (
    LedgerEntryDraft,
    LedgerStore,
    RecordDraft,
    RecordStore,
    VerificationEngine,
    VerificationReason,
)


PAYLOADS = [
    pytest.param({2: "a", 10: "b"}, id="int-keys"),
    pytest.param({"grade": "A", "terms": [{"term": 1, "subjects": {"math": 91, "physics": 88}}]}, id="nested"),
    pytest.param({"cgpa": 9.1, "ratio": 1e-07, "total": 1.0, "big": 1e20}, id="floats"),
    pytest.param({"name": "José Núñez", "school": "北京大学", "badge": "🎓"}, id="unicode"),
    pytest.param(None, id="null"),
    pytest.param({"scores": (90, 85), "flags": [True, False, None]}, id="tuple-and-literals"),
    pytest.param(["first", 2, 3.5], id="top-level-list"),
]


def issue_and_anchor(records, ledger, payload):
    record = records.create(RecordDraft(
        subject_entity_id="STU001",
        type=RecordType.TRANSCRIPT,
        title="Transcript",
        payload=payload,
    ))
    ledger.append(LedgerEntryDraft(
        content_hash=record.content_hash,
        action=LedgerAction.STORE_RECORD,
        record_id=record.id,
        record_type=record.type.value,
    ))
    return record


def reloaded_engine(session, hashing):
    return VerificationEngine(
        RecordStore(session, hashing), LedgerStore(session, hashing), unanchored_policy="reject"
    )


@pytest.mark.parametrize("payload", PAYLOADS)
def test_committed_record_verifies_from_fresh_session(
    db_session, fresh_session, records, ledger, hashing, payload
):
    record = issue_and_anchor(records, ledger, payload=payload)
    db_session.commit()

    result = reloaded_engine(fresh_session, hashing).verify(record.id)
    assert result.reason == VerificationReason.VERIFIED
    assert result.verified is True
    assert result.ledger_hash == record.content_hash


@pytest.mark.parametrize("payload", PAYLOADS)
def test_committed_record_verifies_after_expunge(db_session, records, ledger, engine, payload):
    record_id = issue_and_anchor(records, ledger, payload=payload).id
    db_session.commit()
    db_session.expunge_all()

    assert engine.verify(record_id).reason == VerificationReason.VERIFIED


def test_int_keys_are_stored_as_json_strings(db_session, fresh_session, records, ledger):
    record = issue_and_anchor(records, ledger, payload={2: "a", 10: "b"})
    assert record.payload == {"2": "a", "10": "b"}
    db_session.commit()

    assert fresh_session.get(Record, record.id).payload == {"2": "a", "10": "b"}


def test_tuple_is_stored_as_list(db_session, fresh_session, records, ledger):
    record = issue_and_anchor(records, ledger, payload={"scores": (90, 85)})
    db_session.commit()

    assert fresh_session.get(Record, record.id).payload == {"scores": [90, 85]}


def test_stored_hash_recomputes_after_reload(db_session, fresh_session, records, ledger, hashing):
    record = issue_and_anchor(records, ledger, payload={"grade": "A", "cgpa": 9.1})
    db_session.commit()

    reloaded = fresh_session.get(Record, record.id)
    assert RecordStore(fresh_session, hashing).recompute_hash(reloaded) == record.content_hash


def test_title_edit_then_reload_still_verifies(db_session, fresh_session, records, ledger, hashing):
    record = issue_and_anchor(records, ledger, payload={"grade": "A", 3: "x"})
    db_session.commit()

    records.update_metadata(record.id, {"title": "Renamed Transcript"})
    db_session.commit()

    reloaded = fresh_session.get(Record, record.id)
    assert reloaded.title == "Renamed Transcript"
    assert reloaded.content_hash == record.content_hash
    assert reloaded_engine(fresh_session, hashing).verify(record.id).reason == VerificationReason.VERIFIED


def test_reload_detects_payload_changed_in_database(
    db_session, fresh_session, records, ledger, hashing
):
    record = issue_and_anchor(records, ledger, payload={"grade": "B"})
    db_session.commit()

    db_session.query(Record).filter(Record.id == record.id).update(
        {"payload": {"grade": "A"}}, synchronize_session=False
    )
    db_session.commit()

    result = reloaded_engine(fresh_session, hashing).verify(record.id)
    assert result.verified is False
    assert result.reason == VerificationReason.STORAGE_CORRUPTION
