import logging
from datetime import datetime

from models.cadence import next_occurrence
from models.movement import Movement
from utils.constants import RECURRENCE_MAX_STEPS

logger = logging.getLogger(__name__)


def next_upcoming(
    movement: Movement, now: datetime, max_steps: int = RECURRENCE_MAX_STEPS
) -> datetime | None:
    """
    Return the nearest occurrence of `movement` strictly after `now`, or None.

    One-off movements (and cadences we don't recognize) are upcoming only if
    their own date is in the future. Recurring movements are walked forward
    from their anchor one period at a time; a movement whose next occurrence
    is still not past `now` after `max_steps` periods has no computable next
    occurrence and is left out.
    """
    if not movement.is_recurring:
        return movement.occurs_at if movement.occurs_at > now else None

    candidate = movement.occurs_at
    steps = 0
    while candidate <= now and steps < max_steps:
        following = next_occurrence(candidate, movement.cadence)
        if following is None or following <= candidate:
            break
        candidate = following
        steps += 1

    if candidate > now:
        return candidate
    logger.debug(
        "Movement %s (%s) has no occurrence after %s within %d steps",
        movement.id, movement.cadence.value, now, max_steps,
    )
    return None
