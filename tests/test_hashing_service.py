"""
Tests for canonicalization and content hashing.
"""
from datetime import datetime
from decimal import Decimal

import pytest

from models import RecordType
from services import HashingFailure, HashingService
from services.hashing_service import payment_canonical_form, record_canonical_form


ISSUED_AT = datetime(2024, 6, 1, 12, 30, 45)


def transcript_form(**overrides):
    fields = dict(
        subject_entity_id="STU001",
        record_type=RecordType.TRANSCRIPT,
        title="Semester 1 Transcript",
        payload={"grade": "A", "cgpa": 9.1, "subjects": ["Math", "Physics"]},
        created_at=ISSUED_AT,
    )
    fields.update(overrides)
    return record_canonical_form(**fields)


class TestCanonicalize:

    def test_known_digest(self, hashing):
        # sha256 of {"data":{"a":1,"b":[1,2]},"v":"v1"}
        assert hashing.hash_value({"b": [1, 2], "a": 1}) == (
            "bba4d959ae5a8b37c3de31666724d181028008eecb64f77f5a98fd93be2acdef"
        )

    def test_canonical_bytes_are_compact_sorted_utf8(self, hashing):
        assert hashing.canonicalize({"b": "é", "a": 1}) == '{"data":{"a":1,"b":"é"},"v":"v1"}'.encode("utf-8")

    def test_key_order_does_not_matter(self, hashing):
        a = {"grade": "A", "meta": {"x": 1, "y": 2}}
        b = {"meta": {"y": 2, "x": 1}, "grade": "A"}
        assert hashing.hash_value(a) == hashing.hash_value(b)

    def test_version_tag_changes_digest(self):
        assert HashingService("sha256", "v1").hash_value([1]) != HashingService("sha256", "v2").hash_value([1])

    @pytest.mark.parametrize("value", [
        {"x": object()}, {1, 2}, float("nan"), float("inf"), b"raw", {"name": "\ud800"}, ["ok", "\udfff"],
    ])
    def test_unserializable_input_raises_hashing_failure(self, hashing, value):
        with pytest.raises(HashingFailure):
            hashing.hash_value(value)

    def test_hashing_failure_is_a_type_error(self):
        assert issubclass(HashingFailure, TypeError)


class TestNormalize:

    def test_int_keys_become_strings(self, hashing):
        assert hashing.normalize({2: "a", 10: "b"}) == {"2": "a", "10": "b"}

    def test_normalized_value_hashes_like_its_reload(self, hashing):
        value = {2: "a", 10: "b", "nested": {1: (1, 2)}}
        normalized = hashing.normalize(value)
        assert normalized == {"2": "a", "10": "b", "nested": {"1": [1, 2]}}
        assert hashing.hash_value(normalized) == hashing.hash_value(hashing.normalize(normalized))

    def test_json_values_pass_through(self, hashing):
        value = {"grade": "A", "cgpa": 9.1, "name": "José", "tags": [None, True]}
        assert hashing.normalize(value) == value

    def test_lone_surrogate_raises_hashing_failure(self, hashing):
        with pytest.raises(HashingFailure):
            hashing.normalize({"name": "\ud800"})


class TestAlgorithm:

    def test_default_is_sha256_hex(self, hashing):
        digest = hashing.hash_value("anything")
        assert len(digest) == 64
        int(digest, 16)

    def test_alternative_algorithm(self):
        digest = HashingService("sha512", "v1").hash_value("anything")
        assert len(digest) == 128

    @pytest.mark.parametrize("algorithm", ["md17", "shake_128"])
    def test_unsupported_algorithm_rejected(self, algorithm):
        with pytest.raises(ValueError):
            HashingService(algorithm, "v1")


class TestRecordCanonicalForm:

    def test_same_input_same_hash(self, hashing):
        assert hashing.hash_value(transcript_form()) == hashing.hash_value(transcript_form())

    def test_type_accepts_value_or_member(self, hashing):
        assert hashing.hash_value(transcript_form(record_type="transcript")) == hashing.hash_value(transcript_form())

    def test_microseconds_are_dropped(self, hashing):
        assert hashing.hash_value(transcript_form(created_at=ISSUED_AT.replace(microsecond=999))) == (
            hashing.hash_value(transcript_form())
        )

    @pytest.mark.parametrize("overrides", [
        {"subject_entity_id": "STU002"},
        {"record_type": RecordType.CERTIFICATE},
        {"title": "Semester 1 Transcript "},
        {"created_at": datetime(2024, 6, 1, 12, 30, 46)},
        {"payload": {"grade": "B", "cgpa": 9.1, "subjects": ["Math", "Physics"]}},
        {"payload": {"grade": "A", "cgpa": 9.2, "subjects": ["Math", "Physics"]}},
        {"payload": {"grade": "A", "cgpa": 9.1, "subjects": ["Physics", "Math"]}},
        {"payload": {"grade": "A", "cgpa": 9.1}},
    ])
    def test_any_hashed_field_change_changes_hash(self, hashing, overrides):
        assert hashing.hash_value(transcript_form(**overrides)) != hashing.hash_value(transcript_form())

    def test_form_covers_fixed_field_set(self):
        form = transcript_form()
        assert set(form) == {"subject_entity_id", "type", "title", "payload", "created_at"}
        assert form["type"] == "transcript"
        assert form["created_at"] == "2024-06-01T12:30:45"


class TestPaymentCanonicalForm:

    def test_amount_normalized_to_two_places(self, hashing):
        a = payment_canonical_form(1, "STU001", "registration_fee", Decimal("500"), "USD", ISSUED_AT)
        b = payment_canonical_form(1, "STU001", "registration_fee", Decimal("500.00"), "USD", ISSUED_AT)
        assert a["amount"] == "500.00"
        assert hashing.hash_value(a) == hashing.hash_value(b)

    def test_amount_change_changes_hash(self, hashing):
        a = payment_canonical_form(1, "STU001", "exam_fee", Decimal("50.00"), "USD", ISSUED_AT)
        b = payment_canonical_form(1, "STU001", "exam_fee", Decimal("50.01"), "USD", ISSUED_AT)
        assert hashing.hash_value(a) != hashing.hash_value(b)
