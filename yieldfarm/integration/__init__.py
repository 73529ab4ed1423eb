"""
Imperative shell: the `YieldFarm` ledger, its collaborators, config and snapshots
"""

from .config import FarmConfig, farm_config_from_mapping, load_farm_config
from .custody import AssetCustody, Authority, LedgerCustody, OperatorSetAuthority, SingleOperatorAuthority
from .events import EventLog, FarmEvent
from .farm import YieldFarm
from .farm_snapshot import FARM_SNAPSHOT_VERSION, FarmSnapshot, farm_state_from_snapshot, snapshot_from_farm_state

__all__ = [
    "FarmConfig",
    "farm_config_from_mapping",
    "load_farm_config",
    "AssetCustody",
    "Authority",
    "LedgerCustody",
    "OperatorSetAuthority",
    "SingleOperatorAuthority",
    "EventLog",
    "FarmEvent",
    "YieldFarm",
    "FARM_SNAPSHOT_VERSION",
    "FarmSnapshot",
    "farm_state_from_snapshot",
    "snapshot_from_farm_state",
]
