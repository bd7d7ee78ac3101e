"""
Shared pytest fixtures.

Provides an in-memory credential store and a pinned clock for staging names.
"""
from types import SimpleNamespace

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from credential_export.core.database import Base
from credential_export.models import Workspace, Public, Private, Realm, Core, Host, Service, Login
from factories import SSH_KEY_DATA


# Test database setup (in-memory SQLite for fast tests)
TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

FIXED_EPOCH = 1700000000


@pytest.fixture
def fixed_clock():
    """Clock pinned to FIXED_EPOCH."""
    return lambda: FIXED_EPOCH


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.

    Creates all tables, yields session, then drops all tables.
    """
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def seeded_workspace(db_session):
    """
    Workspace with three cores and two logins.

    - alice: Password, realm WORKGROUP, login on 10.0.0.5:445/tcp (service name unknown)
    - bob: SSHKey, no realm, login on 10.0.0.5:22/tcp ssh
    - carol: NTLMHash, realm CORP

    Returns: namespace with the created model instances
    """
    workspace = Workspace(name="default")
    other = Workspace(name="other")
    db_session.add_all([workspace, other])
    db_session.flush()

    alice = Core(
        workspace_id=workspace.id,
        public=Public(username="alice"),
        private=Private(type="Password", data="hunter2, \"quoted\""),
        realm=Realm(key="Active Directory Domain", value="WORKGROUP"),
    )
    bob = Core(
        workspace_id=workspace.id,
        public=Public(username="bob"),
        private=Private(type="SSHKey", data=SSH_KEY_DATA),
        realm=None,
    )
    carol = Core(
        workspace_id=workspace.id,
        public=Public(username="carol"),
        private=Private(type="NTLMHash", data="aad3b435b51404eeaad3b435b51404ee:8846f7eaee8fb117ad06bdd830b7586c"),
        realm=Realm(key="Active Directory Domain", value="CORP"),
    )
    stranger = Core(
        workspace_id=other.id,
        public=Public(username="mallory"),
        private=Private(type="Password", data="x"),
    )
    db_session.add_all([alice, bob, carol, stranger])
    db_session.flush()

    host = Host(workspace_id=workspace.id, address="10.0.0.5")
    smb = Service(host=host, port=445, proto="tcp", name=None)
    ssh = Service(host=host, port=22, proto="tcp", name="ssh")
    db_session.add_all([host, smb, ssh])
    db_session.flush()

    alice_login = Login(core=alice, service=smb, status="Successful")
    bob_login = Login(core=bob, service=ssh, status="Successful")
    db_session.add_all([alice_login, bob_login])
    db_session.commit()

    return SimpleNamespace(
        workspace=workspace,
        other=other,
        alice=alice,
        bob=bob,
        carol=carol,
        alice_login=alice_login,
        bob_login=bob_login,
    )

