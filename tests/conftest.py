"""Shared fixtures for Bill Book tests."""

from datetime import date

import pytest

from billbook.audit import AuditLogger
from billbook.config import LedgerSettings
from billbook.ledger import LedgerStore
from billbook.models.bill import find_user
from billbook.services.storage import InMemoryAuditStorage, InMemoryBlobStorage
from billbook.session import LedgerSession


@pytest.fixture
def settings(tmp_path):
    return LedgerSettings(
        storage_key="billRecords",
        storage_path=tmp_path / "billbook.json",
        strict_load=False,
        currency_symbol="₹",
    )


@pytest.fixture
def storage():
    return InMemoryBlobStorage()


@pytest.fixture
def audit_storage():
    return InMemoryAuditStorage()


@pytest.fixture
def audit_logger(audit_storage):
    return AuditLogger(audit_storage)


@pytest.fixture
def store(storage, settings, audit_logger):
    return LedgerStore(storage, settings=settings, audit_logger=audit_logger)


@pytest.fixture
def session(store, audit_logger):
    return LedgerSession(store, audit_logger=audit_logger)


@pytest.fixture
def zohaib():
    return find_user(1)


@pytest.fixture
def babar():
    return find_user(2)


@pytest.fixture
def mustafa():
    return find_user(3)


@pytest.fixture
def new_year():
    return date(2024, 1, 1)
