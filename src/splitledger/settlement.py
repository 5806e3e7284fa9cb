"""Greedy debt settlement planning.

Matches the largest debtor with the largest creditor until one side runs
out. This keeps the number of transfers low (at most members - 1) but is not
guaranteed to find the theoretical minimum.
"""

import logging
from collections.abc import Sequence

from .models import NetBalance, Settlement

logger = logging.getLogger(__name__)


def compute_settlements(balances: Sequence[NetBalance]) -> list[Settlement]:
    """
    Compute transfers that bring every balance to zero.

    Steps:
    1. Split balances into creditors (owed money) and debtors (owe money)
    2. Sort both by amount, largest first; equal amounts keep input order
    3. Transfer min(debtor, creditor) from the current debtor to the current
       creditor, moving on from whichever side is paid off
    4. Stop as soon as either side is exhausted

    If the balances do not sum to zero (malformed exact/percentage splits),
    whatever is left on the longer side stays unsettled.

    Args:
        balances: Net balances, as returned by compute_net_balances

    Returns:
        Settlements in the order they were matched
    """
    creditors = [[b.member_id, b.balance] for b in balances if b.balance > 0]
    debtors = [[b.member_id, -b.balance] for b in balances if b.balance < 0]

    # sorted() is stable, including with reverse=True
    creditors = sorted(creditors, key=lambda entry: entry[1], reverse=True)
    debtors = sorted(debtors, key=lambda entry: entry[1], reverse=True)

    settlements: list[Settlement] = []
    i = 0
    j = 0

    while i < len(debtors) and j < len(creditors):
        debtor = debtors[i]
        creditor = creditors[j]
        transfer = min(debtor[1], creditor[1])

        if transfer > 0:
            settlements.append(
                Settlement(
                    from_member_id=debtor[0],
                    to_member_id=creditor[0],
                    amount=transfer,
                )
            )

        debtor[1] -= transfer
        creditor[1] -= transfer

        if debtor[1] == 0:
            i += 1
        if creditor[1] == 0:
            j += 1

    leftover = [entry for entry in debtors[i:] + creditors[j:] if entry[1] != 0]
    if leftover:
        logger.warning(
            f"Balances do not sum to zero; {len(leftover)} member(s) left unsettled: "
            + ", ".join(f"{member_id} ({amount})" for member_id, amount in leftover)
        )

    return settlements


def apply_settlements(
    balances: Sequence[NetBalance], settlements: Sequence[Settlement]
) -> list[NetBalance]:
    """
    Apply settlements to balances and return the resulting balances.

    Paying a settlement raises the payer's balance and lowers the receiver's.
    Settlements naming members not in balances are ignored.

    Args:
        balances: Starting net balances
        settlements: Transfers to apply

    Returns:
        New balances, in the same order
    """
    remaining = {b.member_id: b.balance for b in balances}

    for settlement in settlements:
        if settlement.from_member_id in remaining:
            remaining[settlement.from_member_id] += settlement.amount
        if settlement.to_member_id in remaining:
            remaining[settlement.to_member_id] -= settlement.amount

    return [
        NetBalance(member_id=b.member_id, balance=remaining[b.member_id])
        for b in balances
    ]


def is_settled(balances: Sequence[NetBalance]) -> bool:
    """True if every balance is zero."""
    return all(b.balance == 0 for b in balances)
