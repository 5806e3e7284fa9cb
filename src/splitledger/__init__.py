"""SplitLedger - Work out who owes whom in a shared expense group."""

__version__ = "0.1.0"

from .balances import compute_net_balances
from .config import Settings, load_settings
from .models import (
    EqualSplit,
    ExactSplit,
    Group,
    Member,
    NetBalance,
    PercentageSplit,
    Settlement,
    Transaction,
)
from .service import LedgerService
from .settlement import apply_settlements, compute_settlements

__all__ = [
    "Settings",
    "load_settings",
    "EqualSplit",
    "ExactSplit",
    "Group",
    "Member",
    "NetBalance",
    "PercentageSplit",
    "Settlement",
    "Transaction",
    "compute_net_balances",
    "compute_settlements",
    "apply_settlements",
    "LedgerService",
]
