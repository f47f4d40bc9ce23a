import sqlite3

import pytest

from database.account_dao import AccountDAO
from database.movement_dao import MovementDAO
from models.cadence import Cadence
from services.account_service import AccountService
from services.errors import (
    CONSTRAINT_MESSAGE, PERMISSION_MESSAGE, CollaboratorError, CompensationError, ValidationError,
)
from utils.constants import DEFAULT_ACCOUNT_TYPE

USER = "user-1"


class FailingMovementDAO(MovementDAO):
    def create(self, *args, **kwargs):
        raise sqlite3.IntegrityError("CHECK constraint failed: cadence")


class FailingDeleteMovementDAO(MovementDAO):
    def delete_by_account(self, account_id, user_id):
        raise sqlite3.OperationalError("attempt to write a readonly database")


class ReadOnlyAccountDAO(AccountDAO):
    def delete(self, account_id, user_id):
        raise sqlite3.OperationalError("attempt to write a readonly database")


@pytest.fixture
def service(account_dao, movement_dao):
    return AccountService(account_dao, movement_dao)


def test_create_adds_opening_movement(service):
    account = service.create(USER, "  Wallet ", "cash", "1,000.50")
    assert account.name == "Wallet"
    assert account.account_type == "cash"
    assert account.starting_balance == 1000.5
    assert len(account.movements) == 1
    opening = account.movements[0]
    assert opening.amount == 1000.5
    assert opening.cadence is Cadence.NONE

    [loaded] = service.load_accounts(USER)
    assert loaded.id == account.id
    assert loaded.balance == 1000.5


def test_blank_starting_balance_is_zero(service):
    account = service.create(USER, "Piggy bank", "savings", "")
    assert account.balance == 0.0


@pytest.mark.parametrize("name, account_type, balance", [
    ("", "cash", "10"),
    ("   ", "cash", "10"),
    ("Wallet", "crypto", "10"),
    ("Wallet", "cash", "ten"),
    ("Wallet", "cash", "nan"),
])
def test_invalid_input_is_rejected_before_any_store_call(service, name, account_type, balance):
    with pytest.raises(ValidationError):
        service.create(USER, name, account_type, balance)
    assert service.load_accounts(USER) == []


def test_failed_opening_movement_rolls_back_account(db, account_dao):
    service = AccountService(account_dao, FailingMovementDAO(db))
    with pytest.raises(CollaboratorError) as info:
        service.create(USER, "Wallet", "bank", "100")
    assert not isinstance(info.value, CompensationError)
    assert str(info.value) == CONSTRAINT_MESSAGE
    assert account_dao.get_all(USER) == []


def test_failed_rollback_reports_both_errors(db):
    account_dao = ReadOnlyAccountDAO(db)
    service = AccountService(account_dao, FailingMovementDAO(db))
    with pytest.raises(CompensationError) as info:
        service.create(USER, "Wallet", "bank", "100")
    assert str(info.value) == f"{CONSTRAINT_MESSAGE} {PERMISSION_MESSAGE}"
    # the orphaned account is still there
    assert [a.name for a in account_dao.get_all(USER)] == ["Wallet"]


def test_load_keeps_creation_order_and_user_scope(service):
    first = service.create(USER, "First", "cash", "1")
    second = service.create(USER, "Second", "bank", "2")
    service.create("someone-else", "Theirs", "cash", "3")

    accounts = service.load_accounts(USER)
    assert [a.id for a in accounts] == [first.id, second.id]
    assert all(a.user_id == USER for a in accounts)


def test_delete_removes_movements_then_account(service, movement_dao):
    account = service.create(USER, "Wallet", "cash", "100")
    movement_dao.create(account.id, USER, -20.0, Cadence.WEEKLY)

    service.delete(USER, account.id)

    assert service.load_accounts(USER) == []
    assert movement_dao.get_by_accounts([account.id], USER) == {account.id: []}


def test_store_does_not_cascade_account_deletes(service, account_dao):
    account = service.create(USER, "Wallet", "cash", "100")
    with pytest.raises(sqlite3.IntegrityError):
        account_dao.delete(account.id, USER)


def test_failed_movement_delete_keeps_account(db, account_dao):
    service = AccountService(account_dao, FailingDeleteMovementDAO(db))
    account = service.create(USER, "Wallet", "cash", "100")
    with pytest.raises(CollaboratorError) as info:
        service.delete(USER, account.id)
    assert str(info.value) == PERMISSION_MESSAGE
    assert [a.id for a in service.load_accounts(USER)] == [account.id]


def test_delete_requires_account(service):
    with pytest.raises(ValidationError):
        service.delete(USER, None)


def test_account_type_defaults_to_cash(service):
    account = service.create(USER, "Wallet", starting_balance="5")
    assert account.account_type == DEFAULT_ACCOUNT_TYPE == "cash"


def test_accounts_with_the_same_name_get_distinct_picker_labels(service):
    first = service.create(USER, "Checking", "bank", "10")
    second = service.create(USER, "Checking", "bank", "20")

    labels = {a.picker_label: a.id for a in service.load_accounts(USER)}
    assert labels == {
        f"Checking (#{first.id})": first.id,
        f"Checking (#{second.id})": second.id,
    }
