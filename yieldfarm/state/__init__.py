"""
State tables owned by the staking ledger shell
"""

from .balances import TokenLedger
from .stakers import ParticipantId, StakerTable

__all__ = [
    "TokenLedger",
    "ParticipantId",
    "StakerTable",
]
