"""
Ledger configuration.

`FarmConfig` is a frozen, validated value. Deployments may keep it in a YAML
file; `load_farm_config()` reads it with `yaml.safe_load` and validates it
fail-closed (unknown keys and wrong types are rejected).
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Union

import yaml

from ..core.math import MAX_AMOUNT
from ..core.types import ZeroStakePolicy


@dataclass(frozen=True)
class FarmConfig:
    """Runtime config for the ledger shell."""

    stake_asset: str = "STAKE"
    reward_asset: str = "REWARD"

    # add_rewards while nothing is staked:
    # - CARRY_OVER: hold the amount and hand it to the first subsequent staker.
    # - REJECT: fail with NoStakers.
    zero_stake_policy: ZeroStakePolicy = ZeroStakePolicy.CARRY_OVER

    # Drop records with no stake, no claimable and no carried remainder.
    prune_empty_positions: bool = False

    # Parameter domain bound for every amount argument.
    max_amount: int = MAX_AMOUNT

    def __post_init__(self) -> None:
        for name in ("stake_asset", "reward_asset"):
            v = getattr(self, name)
            if not isinstance(v, str) or not v:
                raise TypeError(f"{name} must be a non-empty str")
        if not isinstance(self.zero_stake_policy, ZeroStakePolicy):
            raise TypeError("zero_stake_policy must be a ZeroStakePolicy")
        if not isinstance(self.prune_empty_positions, bool):
            raise TypeError("prune_empty_positions must be a bool")
        if not isinstance(self.max_amount, int) or isinstance(self.max_amount, bool):
            raise TypeError("max_amount must be an int")
        if self.max_amount <= 0:
            raise ValueError(f"max_amount must be positive: {self.max_amount}")


_CONFIG_KEYS = frozenset(f.name for f in fields(FarmConfig))


def farm_config_from_mapping(obj: Mapping[str, Any]) -> FarmConfig:
    if not isinstance(obj, Mapping):
        raise TypeError("farm config must be a mapping")
    unknown = sorted(set(obj) - _CONFIG_KEYS)
    if unknown:
        raise ValueError(f"unknown farm config keys: {', '.join(map(str, unknown))}")

    kwargs = dict(obj)
    policy = kwargs.get("zero_stake_policy")
    if isinstance(policy, str):
        try:
            kwargs["zero_stake_policy"] = ZeroStakePolicy(policy)
        except ValueError as exc:
            raise ValueError(f"unknown zero_stake_policy: {policy!r}") from exc
    return FarmConfig(**kwargs)


def load_farm_config(path: Union[str, Path]) -> FarmConfig:
    """Load a `FarmConfig` from a YAML file. An empty file yields the defaults."""
    text = Path(path).read_text(encoding="utf-8")
    obj = yaml.safe_load(text)
    if obj is None:
        return FarmConfig()
    return farm_config_from_mapping(obj)
