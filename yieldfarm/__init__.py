"""
yieldfarm: staking ledger with accumulated-reward-per-share distribution
"""

__version__ = "0.1.0"
