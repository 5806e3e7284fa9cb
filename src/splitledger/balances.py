"""Net balance computation for a group's transactions."""

import logging
from collections.abc import Sequence

from .models import Member, NetBalance, Transaction
from .splits import compute_shares
from .validation import ensure_well_formed

logger = logging.getLogger(__name__)


def compute_net_balances(
    members: Sequence[Member],
    transactions: Sequence[Transaction],
    *,
    strict: bool = False,
) -> list[NetBalance]:
    """
    Reduce transactions to one signed balance per member.

    The payer is credited the full amount and each participant is debited
    their share. Ids that are not members are ignored, and transactions with
    no participants contribute nothing. Exact and percentage shares are not
    checked against the amount unless strict is set.

    Args:
        members: Group members, in display order
        transactions: Transactions to reduce
        strict: Validate splits first and raise on any issue

    Returns:
        One NetBalance per member, in member order

    Raises:
        SplitValidationError: Only if strict is set and a split is malformed
    """
    if strict:
        ensure_well_formed(members, transactions)

    balances = {member.id: 0 for member in members}

    for tx in transactions:
        if not tx.participant_ids:
            logger.debug(f"Skipping transaction {tx.id}: no participants")
            continue

        if tx.payer_id in balances:
            balances[tx.payer_id] += tx.amount

        for member_id, share in compute_shares(tx):
            if member_id in balances:
                balances[member_id] -= share

    return [
        NetBalance(member_id=member.id, balance=balances[member.id])
        for member in members
    ]
