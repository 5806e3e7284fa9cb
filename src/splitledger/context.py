"""Financial context for the group assistant.

Builds a snapshot of a group's balances, settlements and spending with member
names resolved and amounts formatted, and renders it as the Markdown section
of an assistant prompt.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from .balances import compute_net_balances
from .currency import format_money, to_major_units
from .models import Group
from .settlement import compute_settlements
from .stats import total_spent

UNKNOWN_MEMBER = "Unknown"


class ContextMember(BaseModel):
    id: str
    name: str


class ContextTransaction(BaseModel):
    title: str
    amount: int  # minor units
    amount_formatted: str
    paid_by_name: str
    date: str | None = None  # ISO
    split_between: list[str]
    split_type: str
    is_recurring: bool = False
    recurrence_frequency: str | None = None
    original_currency: str | None = None
    original_amount: int | None = None


class ContextSettlement(BaseModel):
    from_name: str
    to_name: str
    amount: int
    amount_formatted: str


class ContextBalance(BaseModel):
    name: str
    balance: int
    balance_formatted: str


class FinancialContext(BaseModel):
    """Everything the assistant needs to answer questions about a group."""

    group_name: str
    currency: str
    generated_at: datetime
    members: list[ContextMember]
    transactions: list[ContextTransaction] = Field(default_factory=list)
    settlements: list[ContextSettlement] = Field(default_factory=list)
    net_balances: list[ContextBalance] = Field(default_factory=list)
    total_spent: int = 0
    total_spent_formatted: str = ""


def build_financial_context(
    group: Group,
    now: datetime | None = None,
    *,
    default_currency: str = "USD",
    strict: bool = False,
) -> FinancialContext:
    """
    Build the assistant context for a group.

    Args:
        group: Group snapshot
        now: Timestamp recorded as generated_at, defaults to the current time
        default_currency: Used when the group has no currency set
        strict: Passed through to compute_net_balances

    Returns:
        FinancialContext with names resolved ("Unknown" for stale ids)
    """
    names = group.member_names
    currency = group.currency or default_currency

    def name_of(member_id: str) -> str:
        return names.get(member_id, UNKNOWN_MEMBER)

    balances = compute_net_balances(group.members, group.transactions, strict=strict)
    settlements = compute_settlements(balances)
    spent = total_spent(group.transactions)

    return FinancialContext(
        group_name=group.name,
        currency=currency,
        generated_at=now or datetime.now(),
        members=[ContextMember(id=m.id, name=m.name) for m in group.members],
        transactions=[
            ContextTransaction(
                title=tx.title,
                amount=tx.amount,
                amount_formatted=format_money(tx.amount, currency),
                paid_by_name=name_of(tx.payer_id),
                date=tx.occurred_at.isoformat() if tx.occurred_at else None,
                split_between=[name_of(pid) for pid in tx.participant_ids],
                split_type=tx.split.mode,
                is_recurring=tx.is_recurring,
                recurrence_frequency=tx.recurrence_frequency,
                original_currency=tx.original_currency,
                original_amount=tx.original_amount,
            )
            for tx in group.transactions
        ],
        settlements=[
            ContextSettlement(
                from_name=name_of(s.from_member_id),
                to_name=name_of(s.to_member_id),
                amount=s.amount,
                amount_formatted=format_money(s.amount, currency),
            )
            for s in settlements
        ],
        net_balances=[
            ContextBalance(
                name=name_of(b.member_id),
                balance=b.balance,
                balance_formatted=format_money(b.balance, currency),
            )
            for b in balances
        ],
        total_spent=spent,
        total_spent_formatted=format_money(spent, currency),
    )


def _transaction_line(tx: ContextTransaction, currency: str) -> str:
    line = (
        f'- "{tx.title}": {currency} {to_major_units(tx.amount):.2f}, '
        f"paid by {tx.paid_by_name}, {tx.split_type} split between "
        f"{', '.join(tx.split_between)}, on {tx.date or 'unknown date'}"
    )
    if tx.is_recurring:
        line += f" (recurring {tx.recurrence_frequency})"
    if tx.original_currency:
        line += (
            f" (originally {tx.original_currency} "
            f"{to_major_units(tx.original_amount or 0):.2f})"
        )
    return line


def render_financial_context(context: FinancialContext, recent_limit: int = 20) -> str:
    """
    Render the context as the Markdown data section of an assistant prompt.

    Args:
        context: Context built by build_financial_context
        recent_limit: Number of transactions listed under "Recent Transactions"

    Returns:
        Markdown text
    """
    ctx = context
    lines = [
        f'## Group: "{ctx.group_name}" ({ctx.currency})',
        f"Members: {', '.join(m.name for m in ctx.members)}",
        f"Total group spending: {ctx.total_spent_formatted}",
        f"Number of expenses: {len(ctx.transactions)}",
        "",
        "## Net Balances (positive = owed money back, negative = owes money):",
    ]
    lines.extend(f"- {b.name}: {b.balance_formatted}" for b in ctx.net_balances)

    lines += ["", "## Settlements Needed:"]
    if not ctx.settlements:
        lines.append("Everyone is settled up!")
    else:
        lines.extend(
            f"- {s.from_name} owes {s.to_name} {s.amount_formatted}"
            for s in ctx.settlements
        )

    lines += ["", f"## Recent Transactions (last {recent_limit}):"]
    lines.extend(
        _transaction_line(tx, ctx.currency) for tx in ctx.transactions[:recent_limit]
    )

    lines += ["", "## Summary Statistics:"]
    for member in ctx.members:
        paid = sum(tx.amount for tx in ctx.transactions if tx.paid_by_name == member.name)
        lines.append(
            f"- {member.name}: paid {ctx.currency} {to_major_units(paid):.2f} total"
        )

    recurring = sum(1 for tx in ctx.transactions if tx.is_recurring)
    lines += [
        "",
        f"Recurring expenses: {recurring} out of {len(ctx.transactions)}",
    ]

    return "\n".join(lines)
