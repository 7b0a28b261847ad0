"""
BlockEdu - Test Configuration and Fixtures
"""
import os
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Set testing environment before the app reads its config
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-jwt-secret"
os.environ["UNANCHORED_POLICY"] = "accept"

from main import app
from database import get_session
from dependencies import create_access_token
from models import Base, Institution
from services import HashingService, LedgerStore, RecordStore, UserService, VerificationEngine

# One in-memory database per test; StaticPool keeps it on a single connection
test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(bind=test_engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test"""
    Base.metadata.create_all(bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Create test client sharing the test session"""
    def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def hashing() -> HashingService:
    return HashingService("sha256", "v1")


@pytest.fixture
def ledger(db_session: Session, hashing: HashingService) -> LedgerStore:
    return LedgerStore(db_session, hashing)


@pytest.fixture
def records(db_session: Session, hashing: HashingService) -> RecordStore:
    return RecordStore(db_session, hashing)


@pytest.fixture
def engine(records: RecordStore, ledger: LedgerStore) -> VerificationEngine:
    return VerificationEngine(records, ledger, unanchored_policy="accept")


@pytest.fixture
def institution(db_session: Session) -> Institution:
    inst = Institution(name="Test University", code="TU", wallet_address="0xinst", verified=True)
    db_session.add(inst)
    db_session.flush()
    return inst


def _headers(user) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user)}"}


@pytest.fixture
def admin_headers(db_session: Session) -> dict:
    user = UserService.create_user(
        db_session, email="admin@blockedu.test", password="admin123", name="Admin", role="admin"
    )
    return _headers(user)


@pytest.fixture
def institution_headers(db_session: Session, institution: Institution) -> dict:
    user = UserService.create_user(
        db_session,
        email="registrar@tu.test",
        password="registrar123",
        name="Registrar",
        role="institution",
        wallet_address="0xregistrar",
        institution_id=institution.id,
    )
    return _headers(user)


@pytest.fixture
def student_user(db_session: Session):
    return UserService.create_user(
        db_session,
        email="student@tu.test",
        password="student123",
        name="Student One",
        role="student",
        wallet_address="0xstudent",
        student_id="STU001",
    )


@pytest.fixture
def student_headers(student_user) -> dict:
    return _headers(student_user)


@pytest.fixture
def fresh_session(db_session: Session) -> Generator[Session, None, None]:
    """A second session on the same database, with an empty identity map"""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
