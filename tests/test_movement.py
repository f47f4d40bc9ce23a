from datetime import datetime

from models.account import Account
from models.cadence import Cadence
from models.movement import Movement, normalize_movements


def test_from_remote_record():
    m = Movement.from_record({
        "id": 7,
        "account_id": 3,
        "amount": "12.50",
        "repeats_every": "weekly",
        "created_at": "2024-03-01T10:00:00Z",
    })
    assert m.id == 7
    assert m.account_id == 3
    assert m.amount == 12.5
    assert m.cadence is Cadence.WEEKLY
    assert m.occurs_at == datetime(2024, 3, 1, 10, 0)
    assert m.is_recurring


def test_offsets_are_converted_to_utc():
    m = Movement.from_record({
        "id": 1, "amount": 5, "cadence": "none",
        "occurs_at": "2024-03-01T12:00:00+02:00",
    })
    assert m.occurs_at == datetime(2024, 3, 1, 10, 0)


def test_occurs_at_takes_precedence_over_created_at():
    m = Movement.from_record({
        "id": 1, "amount": 5, "cadence": "none",
        "occurs_at": "2024-01-15 00:00:00",
        "created_at": "2024-06-01 08:00:00.250",
    })
    assert m.occurs_at == datetime(2024, 1, 15)


def test_unrecognized_cadence_keeps_raw_label_and_never_recurs():
    m = Movement.from_record({
        "id": 1, "amount": -3, "repeats_every": "hourly", "created_at": "2024-01-01",
    })
    assert m.cadence is Cadence.UNKNOWN
    assert m.cadence_label == "hourly"
    assert not m.is_recurring


def test_missing_amount_defaults_to_zero():
    m = Movement.from_record({"id": 1, "amount": None, "cadence": "none", "created_at": "2024-01-01"})
    assert m.amount == 0.0


def test_normalize_sorts_by_date_and_keeps_creation_order_on_ties():
    records = [
        {"id": 1, "amount": 1, "cadence": "none", "created_at": "2024-02-01 00:00:00"},
        {"id": 2, "amount": 2, "cadence": "none", "created_at": "2024-01-01 00:00:00"},
        {"id": 3, "amount": 3, "cadence": "none", "created_at": "2024-02-01 00:00:00"},
    ]
    movements = normalize_movements(records)
    assert [m.id for m in movements] == [2, 1, 3]
    assert [m.sequence for m in movements] == [1, 0, 2]


def test_account_balance_is_sum_of_movements():
    movements = normalize_movements([
        {"id": 1, "amount": 1000, "cadence": "none", "created_at": "2024-01-01"},
        {"id": 2, "amount": -250.5, "cadence": "monthly", "created_at": "2024-01-02"},
    ])
    account = Account.from_record(
        {"id": 1, "name": "Wallet", "type": "cash", "starting_balance": 1000,
         "created_at": "2024-01-01 00:00:00"},
        movements,
    )
    assert account.balance == 749.5
    assert account.type_label == "Cash"
    assert account.created_at == datetime(2024, 1, 1)


def test_account_without_movements_has_zero_balance():
    assert Account(id=1, name="Empty").balance == 0
