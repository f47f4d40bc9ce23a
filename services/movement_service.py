import logging
import sqlite3
from datetime import datetime

from database.movement_dao import MovementDAO
from models.cadence import Cadence, STORED_CADENCES
from models.movement import Movement
from services.errors import CollaboratorError, ValidationError, describe_store_error
from utils.currency import parse_amount

logger = logging.getLogger(__name__)


class MovementService:
    def __init__(self, movement_dao: MovementDAO):
        self._dao = movement_dao

    def create(
        self,
        user_id: str,
        account_id: int | None,
        amount,
        cadence="none",
        occurs_at: datetime | None = None,
    ) -> Movement:
        """Record a movement; the store dates it now unless occurs_at is given."""
        if account_id is None:
            raise ValidationError("Choose an account for the movement.")
        value = parse_amount(amount)
        if value is None:
            raise ValidationError("Movement amount must be a valid number.")
        parsed = Cadence.parse(cadence)
        if parsed not in STORED_CADENCES:
            raise ValidationError(f"Unknown cadence '{cadence}'.")
        try:
            movement = self._dao.create(account_id, user_id, value, parsed, occurs_at)
        except sqlite3.Error as exc:
            raise CollaboratorError(describe_store_error(exc)) from exc
        logger.info(
            "Added %s movement %s to account %s", parsed.value, movement.id, account_id
        )
        return movement

    def delete(self, user_id: str, movement_id: int):
        try:
            self._dao.delete(movement_id, user_id)
        except sqlite3.Error as exc:
            raise CollaboratorError(describe_store_error(exc)) from exc
        logger.info("Deleted movement %s", movement_id)
