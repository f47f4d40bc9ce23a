from datetime import datetime

import pytest

from models.cadence import Cadence
from services.account_service import AccountService
from services.cashflow_service import CashflowService
from services.errors import CollaboratorError, ValidationError
from services.movement_service import MovementService

USER = "user-1"


@pytest.fixture
def accounts(account_dao, movement_dao):
    return AccountService(account_dao, movement_dao)


@pytest.fixture
def service(movement_dao):
    return MovementService(movement_dao)


@pytest.fixture
def wallet(accounts):
    return accounts.create(USER, "Wallet", "cash", "1000")


def test_create_recurring_movement(service, wallet):
    movement = service.create(USER, wallet.id, "-40.5", "monthly", occurs_at=datetime(2024, 1, 15))
    assert movement.account_id == wallet.id
    assert movement.amount == -40.5
    assert movement.cadence is Cadence.MONTHLY
    assert movement.occurs_at == datetime(2024, 1, 15)


def test_store_stamps_date_when_omitted(service, wallet):
    movement = service.create(USER, wallet.id, 25, Cadence.WEEKLY)
    assert movement.occurs_at.year >= 2024


@pytest.mark.parametrize("amount", ["", None, "abc", "inf"])
def test_amount_must_be_a_number(service, wallet, amount):
    with pytest.raises(ValidationError):
        service.create(USER, wallet.id, amount, "none")


def test_account_is_required(service):
    with pytest.raises(ValidationError):
        service.create(USER, None, "10", "none")


def test_unknown_cadence_is_rejected(service, wallet):
    with pytest.raises(ValidationError):
        service.create(USER, wallet.id, "10", "hourly")


def test_missing_account_surfaces_store_error(service):
    with pytest.raises(CollaboratorError) as info:
        service.create(USER, 999, "10", "none")
    assert "FOREIGN KEY" in str(info.value)


def test_delete_movement(service, accounts, wallet):
    extra = service.create(USER, wallet.id, "-5", "daily")
    service.delete(USER, extra.id)
    [loaded] = accounts.load_accounts(USER)
    assert [m.id for m in loaded.movements] == [wallet.movements[0].id]


def test_loaded_accounts_feed_the_cashflow_summary(service, accounts, wallet):
    service.create(USER, wallet.id, "-50", "monthly", occurs_at=datetime(2024, 1, 15))
    [loaded] = accounts.load_accounts(USER)

    summary = CashflowService().summarize(loaded, datetime(2024, 6, 1))
    # the opening movement is dated today, so it sorts after the June occurrence
    first = summary.upcoming[0]
    assert (first.next_date, first.amount) == (datetime(2024, 6, 15), -50.0)
    assert loaded.balance == 950.0
