"""
Follow-up task type and status value objects
"""

from enum import Enum


class FollowupType(str, Enum):
    """Kind of outreach a follow-up task asks for"""

    REVENTA_PACK = "reventa_pack"  # upsell a pack to a single-meal buyer
    RECOMPRA = "recompra"  # remind a pack buyer to reorder


class FollowupStatus(str, Enum):
    """Follow-up task status; pending -> sent is the only transition"""

    PENDING = "pending"
    SENT = "sent"
