"""Pydantic domain models for SplitLedger."""

from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

AVATAR_COLORS = [
    "#10b981",
    "#3b82f6",
    "#f59e0b",
    "#ef4444",
    "#8b5cf6",
    "#ec4899",
    "#06b6d4",
    "#f97316",
    "#14b8a6",
    "#6366f1",
]

# ============================================================================
# Group Models
# ============================================================================


class Member(BaseModel):
    """A member of an expense-sharing group."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    email: str | None = None
    avatar_color: str = AVATAR_COLORS[0]  # presentation only


# ============================================================================
# Split Models
# ============================================================================


Percentage = Annotated[float, Field(ge=0, le=100, allow_inf_nan=False)]


class EqualSplit(BaseModel):
    """Divide the amount evenly, extra cents going to the first participants."""

    model_config = ConfigDict(frozen=True)

    mode: Literal["equal"] = "equal"


class ExactSplit(BaseModel):
    """Each participant owes a fixed amount in minor units."""

    model_config = ConfigDict(frozen=True)

    mode: Literal["exact"] = "exact"
    shares: dict[str, int] = Field(default_factory=dict)


class PercentageSplit(BaseModel):
    """Each participant owes a percentage (0-100) of the amount."""

    model_config = ConfigDict(frozen=True)

    mode: Literal["percentage"] = "percentage"
    percentages: dict[str, Percentage] = Field(default_factory=dict)


Split = Annotated[
    EqualSplit | ExactSplit | PercentageSplit, Field(discriminator="mode")
]

RecurrenceFrequency = Literal["daily", "weekly", "biweekly", "monthly", "yearly"]


class Transaction(BaseModel):
    """A shared expense recorded by a group.

    The amount is always in the group's currency, in minor units (cents).
    original_currency/original_amount only record what was typed in; no
    conversion happens here.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    title: str = ""
    amount: int = Field(ge=0)  # minor units
    payer_id: str
    participant_ids: list[str]
    split: Split = Field(default_factory=EqualSplit)
    occurred_at: datetime | None = None
    place: str | None = None
    is_recurring: bool = False
    recurrence_frequency: RecurrenceFrequency | None = None
    original_currency: str | None = None
    original_amount: int | None = None


class Group(BaseModel):
    """A caller-owned snapshot of a group: its members and transactions."""

    id: str
    name: str
    currency: str | None = None  # falls back to the configured default
    members: list[Member] = Field(default_factory=list)
    transactions: list[Transaction] = Field(default_factory=list)

    @property
    def member_names(self) -> dict[str, str]:
        """Map member id -> display name."""
        return {member.id: member.name for member in self.members}


# ============================================================================
# Derived Models
# ============================================================================


class NetBalance(BaseModel):
    """Signed total a member is owed (positive) or owes (negative)."""

    model_config = ConfigDict(frozen=True)

    member_id: str
    balance: int  # minor units


class Settlement(BaseModel):
    """A suggested payment from one member to another."""

    model_config = ConfigDict(frozen=True)

    from_member_id: str
    to_member_id: str
    amount: int = Field(gt=0)  # minor units


class SplitIssue(BaseModel):
    """A problem found by strict split validation."""

    transaction_id: str
    kind: Literal[
        "unknown_payer",
        "unknown_participant",
        "exact_sum_mismatch",
        "percentage_sum_mismatch",
        "rounded_sum_mismatch",
    ]
    message: str


# ============================================================================
# Highlight Models
# ============================================================================


class SpenderTotal(BaseModel):
    """Total amount a member has paid for the group."""

    member_id: str
    amount: int


class DailySpending(BaseModel):
    """Total spending on one calendar day."""

    day: str  # ISO date
    amount: int


class Highlights(BaseModel):
    """Headline statistics for a group."""

    total_spent: int
    weekly_spending: int
    monthly_spending: int
    top_spender: SpenderTotal | None = None
    spending_over_time: list[DailySpending] = Field(default_factory=list)


class LedgerSummary(BaseModel):
    """Balances and settlements for a group, ready for display."""

    group_id: str
    currency: str
    balances: list[NetBalance]
    settlements: list[Settlement]
    residual: list[NetBalance] = Field(default_factory=list)  # left after settling

    @property
    def is_settled(self) -> bool:
        """True if nobody owes anything."""
        return not self.settlements and not self.residual
