"""
Domain models and value objects.

Contains fundamental domain entities like Entry, NetPosition, Transfer, SettlementPlan.
"""

from src.core.domain.entry import Entry
from src.core.domain.participant import (
    ParticipantId,
    sorted_participants,
    validate_participant_id,
)
from src.core.domain.plan import SettlementMode, SettlementPlan
from src.core.domain.position import NetPosition, Side, positions_total
from src.core.domain.session import (
    ParticipantSummary,
    SessionSnapshot,
    SessionStatus,
    SessionSummary,
)
from src.core.domain.transfer import Transfer

__all__ = [
    # Participant
    "ParticipantId",
    "validate_participant_id",
    "sorted_participants",
    # Entry model
    "Entry",
    # Net position model
    "NetPosition",
    "Side",
    "positions_total",
    # Transfer model
    "Transfer",
    # Plan model
    "SettlementPlan",
    "SettlementMode",
    # Session models
    "SessionSnapshot",
    "SessionStatus",
    "ParticipantSummary",
    "SessionSummary",
]
