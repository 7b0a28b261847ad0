"""
Tests for the append-only ledger store.
"""
import re

import pytest

from models import ImmutableLedgerError, LedgerAction, LedgerEntry
from services import LedgerEntryDraft, LedgerStore


def draft(content_hash="ab" * 32, record_id=None, action=LedgerAction.STORE_RECORD):
    return LedgerEntryDraft(content_hash=content_hash, action=action, record_id=record_id)


class TestAppend:

    def test_assigns_transaction_id_and_block(self, ledger):
        entry = ledger.append(draft(record_id=1))
        assert re.fullmatch(r"0x[0-9a-f]{64}", entry.transaction_id)
        assert 18_000_000 <= entry.block_number < 19_000_000
        assert entry.appended_at is not None
        assert entry.id is not None

    def test_transaction_ids_are_unique(self, ledger):
        ids = {ledger.append(draft(record_id=i)).transaction_id for i in range(20)}
        assert len(ids) == 20

    def test_entries_kept_in_insertion_order(self, ledger):
        hashes = ["%064x" % i for i in range(5)]
        for h in hashes:
            ledger.append(draft(content_hash=h))
        assert [e.content_hash for e in ledger.list_entries()] == hashes
        assert [e.content_hash for e in ledger.list_entries(limit=2, newest_first=True)] == hashes[:-3:-1]
        assert ledger.count() == 5

    def test_store_has_no_mutating_operations(self):
        for name in ("update", "delete", "remove", "clear"):
            assert not hasattr(LedgerStore, name)


class TestImmutability:

    def test_update_is_refused_on_flush(self, db_session, ledger):
        entry = ledger.append(draft(record_id=1))
        entry.content_hash = "cd" * 32
        with pytest.raises(ImmutableLedgerError):
            db_session.flush()

    def test_delete_is_refused_on_flush(self, db_session, ledger):
        entry = ledger.append(draft(record_id=1))
        db_session.delete(entry)
        with pytest.raises(ImmutableLedgerError):
            db_session.flush()


class TestLookups:

    def test_find_by_transaction_id(self, ledger):
        entry = ledger.append(draft())
        assert ledger.find_by_transaction_id(entry.transaction_id) is entry
        assert ledger.find_by_transaction_id("0x" + "0" * 64) is None

    def test_find_by_record_id_returns_all_in_order(self, ledger):
        first = ledger.append(draft(content_hash="11" * 32, record_id=7))
        ledger.append(draft(content_hash="22" * 32, record_id=8))
        second = ledger.append(draft(content_hash="33" * 32, record_id=7))
        assert ledger.find_by_record_id(7) == [first, second]
        assert ledger.latest_for_record(7) is second
        assert ledger.find_by_record_id(99) == []
        assert ledger.latest_for_record(99) is None

    def test_find_by_content_hash_returns_earliest(self, ledger):
        first = ledger.append(draft(content_hash="ef" * 32))
        ledger.append(draft(content_hash="ef" * 32))
        assert ledger.find_by_content_hash("ef" * 32) is first
        assert ledger.find_by_content_hash("00" * 32) is None

    def test_store_hash_anchors_hash_of_data(self, ledger, hashing):
        entry = ledger.store_hash({"doc": "diploma"}, record_type="certificate", actor_address="0xabc")
        assert entry.action == LedgerAction.STORE_HASH
        assert entry.record_id is None
        assert entry.record_type == "certificate"
        assert entry.actor_address == "0xabc"
        assert entry.content_hash == hashing.hash_value({"doc": "diploma"})
        assert isinstance(ledger.find_by_content_hash(entry.content_hash), LedgerEntry)
