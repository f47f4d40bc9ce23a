import pytest

from database.account_dao import AccountDAO
from database.db_manager import DatabaseManager
from database.movement_dao import MovementDAO


@pytest.fixture
def db():
    manager = DatabaseManager(":memory:")
    manager.initialize()
    yield manager
    manager.close()


@pytest.fixture
def account_dao(db):
    return AccountDAO(db)


@pytest.fixture
def movement_dao(db):
    return MovementDAO(db)
