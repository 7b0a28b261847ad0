"""
Tests for accounts, credentials and account administration.
"""
from decimal import Decimal

import pytest

from models import Payment, SystemAction
from services import (
    AuditService,
    DuplicateUserError,
    InvalidPasswordError,
    PaymentService,
    UserNotFoundError,
    UserService,
)


@pytest.fixture
def admin_user(db_session):
    return UserService.create_user(
        db_session, email="admin@blockedu.test", password="admin123", name="Admin", role="admin"
    )


class TestWalletLogin:

    def test_unknown_wallet_creates_student(self, db_session):
        user, created = UserService.wallet_login(db_session, "0x8ba1f109551bD432803012645Ac136ddd64DBA72")
        assert created is True
        assert user.role == "student"
        assert user.email is None
        assert user.password is None
        assert user.name == "User 0x8ba1f1"

    def test_known_wallet_is_reused_case_insensitively(self, db_session, student_user):
        user, created = UserService.wallet_login(db_session, "0XSTUDENT")
        assert created is False
        assert user.id == student_user.id

    def test_two_wallet_only_accounts_coexist(self, db_session):
        a, _ = UserService.wallet_login(db_session, "0xaaa")
        b, _ = UserService.wallet_login(db_session, "0xbbb")
        assert a.id != b.id

    def test_wallet_only_account_cannot_password_login(self, db_session):
        user, _ = UserService.wallet_login(db_session, "0xaaa")
        assert UserService.authenticate(db_session, "", "anything") is None


class TestChangePassword:

    def test_wrong_current_password(self, db_session, student_user):
        with pytest.raises(InvalidPasswordError):
            UserService.change_password(db_session, student_user, "wrong", "newpass123")
        assert UserService.authenticate(db_session, "student@tu.test", "student123") is not None

    def test_change_and_log(self, db_session, student_user):
        UserService.change_password(db_session, student_user, "student123", "newpass123", ip_address="10.0.0.1")
        assert UserService.authenticate(db_session, "student@tu.test", "student123") is None
        assert UserService.authenticate(db_session, "student@tu.test", "newpass123") is not None

        log = AuditService.recent(db_session)[0]
        assert log.action == SystemAction.PASSWORD_CHANGED
        assert log.target_user_id == student_user.id
        assert log.ip_address == "10.0.0.1"

    def test_wallet_only_account_has_no_current_password(self, db_session):
        user, _ = UserService.wallet_login(db_session, "0xaaa")
        with pytest.raises(InvalidPasswordError):
            UserService.change_password(db_session, user, "", "newpass123")


class TestUpdateProfile:

    def test_only_given_fields_change(self, db_session, student_user):
        UserService.update_profile(db_session, student_user, {"name": "Renamed"})
        assert student_user.name == "Renamed"
        assert student_user.email == "student@tu.test"
        assert student_user.wallet_address == "0xstudent"

    def test_wallet_can_be_cleared(self, db_session, student_user):
        UserService.update_profile(db_session, student_user, {"wallet_address": None})
        assert student_user.wallet_address is None

    def test_email_taken_by_someone_else(self, db_session, student_user, admin_user):
        with pytest.raises(DuplicateUserError):
            UserService.update_profile(db_session, student_user, {"email": "admin@blockedu.test"})

    def test_role_is_not_self_editable(self, db_session, student_user):
        with pytest.raises(ValueError):
            UserService.update_profile(db_session, student_user, {"role": "admin"})
        assert student_user.role == "student"


class TestAdministration:

    def test_admin_update_role(self, db_session, admin_user, student_user):
        UserService.admin_update(db_session, student_user.id, {"role": "institution"}, performed_by=admin_user.id)
        assert student_user.role == "institution"
        log = AuditService.recent(db_session)[0]
        assert log.action == SystemAction.USER_UPDATED
        assert log.performed_by == admin_user.id
        assert log.details == {"role": "institution"}

    def test_admin_update_rejects_unknown_role(self, db_session, admin_user, student_user):
        with pytest.raises(ValueError):
            UserService.admin_update(db_session, student_user.id, {"role": "dean"}, performed_by=admin_user.id)

    def test_admin_update_missing_user(self, db_session, admin_user):
        with pytest.raises(UserNotFoundError):
            UserService.admin_update(db_session, 999, {"name": "X"}, performed_by=admin_user.id)

    def test_cannot_delete_self(self, db_session, admin_user):
        with pytest.raises(ValueError):
            UserService.delete_user(db_session, admin_user.id, performed_by=admin_user.id)
        assert UserService.get(db_session, admin_user.id) is not None

    def test_delete_removes_payments(self, db_session, ledger, admin_user, student_user):
        PaymentService.record_payment(db_session, student_user, "exam_fee", Decimal("10.00"), ledger=ledger)
        UserService.delete_user(db_session, student_user.id, performed_by=admin_user.id)

        assert UserService.get(db_session, student_user.id) is None
        assert db_session.query(Payment).count() == 0
        # The payment's anchor stays on the ledger
        assert ledger.count() == 1
        log = AuditService.recent(db_session)[0]
        assert log.action == SystemAction.USER_DELETED
        assert log.target_email == "student@tu.test"

    def test_delete_missing_user(self, db_session, admin_user):
        with pytest.raises(UserNotFoundError):
            UserService.delete_user(db_session, 999, performed_by=admin_user.id)

    def test_reset_to_random_password(self, db_session, admin_user, student_user):
        password = UserService.reset_password(db_session, student_user.id, performed_by=admin_user.id)
        assert len(password) >= 12
        assert UserService.authenticate(db_session, "student@tu.test", password) is not None
        assert AuditService.recent(db_session)[0].action == SystemAction.PASSWORD_RESET

    def test_reset_to_given_password(self, db_session, admin_user, student_user):
        UserService.reset_password(
            db_session, student_user.id, performed_by=admin_user.id, new_password="chosen123"
        )
        assert UserService.authenticate(db_session, "student@tu.test", "chosen123") is not None

    def test_count_by_role(self, db_session, admin_user, student_user):
        assert UserService.count_by_role(db_session) == {"admin": 1, "institution": 0, "student": 1}
