"""Opt-in strict validation of transaction splits.

The balance calculator tolerates malformed splits by default. These checks
report what would make balances skewed or leave a residual nobody can settle.
"""

import logging
from collections.abc import Iterable
from decimal import Decimal

from .exceptions import SplitValidationError
from .models import ExactSplit, Member, PercentageSplit, SplitIssue, Transaction
from .splits import compute_shares

logger = logging.getLogger(__name__)


def find_transaction_issues(
    transaction: Transaction, member_ids: set[str]
) -> list[SplitIssue]:
    """
    Check a single transaction against the group's members and its own amount.

    Args:
        transaction: The transaction to check
        member_ids: Ids of the group's members

    Returns:
        Issues found (empty if the transaction is well-formed)
    """
    tx = transaction
    issues: list[SplitIssue] = []

    # Contributes nothing, so there is nothing to get wrong
    if not tx.participant_ids:
        return issues

    if tx.payer_id not in member_ids:
        issues.append(
            SplitIssue(
                transaction_id=tx.id,
                kind="unknown_payer",
                message=f"Transaction {tx.id}: payer {tx.payer_id} is not a member",
            )
        )

    for pid in tx.participant_ids:
        if pid not in member_ids:
            issues.append(
                SplitIssue(
                    transaction_id=tx.id,
                    kind="unknown_participant",
                    message=f"Transaction {tx.id}: participant {pid} is not a member",
                )
            )

    split = tx.split
    if isinstance(split, ExactSplit):
        total = sum(split.shares.get(pid, 0) for pid in tx.participant_ids)
        if total != tx.amount:
            issues.append(
                SplitIssue(
                    transaction_id=tx.id,
                    kind="exact_sum_mismatch",
                    message=(
                        f"Transaction {tx.id}: exact shares total {total} "
                        f"but amount is {tx.amount}"
                    ),
                )
            )

    elif isinstance(split, PercentageSplit):
        pct_total = sum(
            (Decimal(str(split.percentages.get(pid, 0))) for pid in tx.participant_ids),
            Decimal(0),
        )
        if pct_total != 100:
            issues.append(
                SplitIssue(
                    transaction_id=tx.id,
                    kind="percentage_sum_mismatch",
                    message=(
                        f"Transaction {tx.id}: percentages total {pct_total}% "
                        f"instead of 100%"
                    ),
                )
            )
        else:
            rounded_total = sum(share for _, share in compute_shares(tx))
            if rounded_total != tx.amount:
                issues.append(
                    SplitIssue(
                        transaction_id=tx.id,
                        kind="rounded_sum_mismatch",
                        message=(
                            f"Transaction {tx.id}: rounded percentage shares total "
                            f"{rounded_total} but amount is {tx.amount}"
                        ),
                    )
                )

    return issues


def find_split_issues(
    members: Iterable[Member], transactions: Iterable[Transaction]
) -> list[SplitIssue]:
    """
    Check every transaction of a group.

    Args:
        members: Group members
        transactions: Transactions to check

    Returns:
        All issues, in transaction order
    """
    member_ids = {member.id for member in members}
    issues: list[SplitIssue] = []
    for transaction in transactions:
        issues.extend(find_transaction_issues(transaction, member_ids))

    if issues:
        logger.debug(f"Found {len(issues)} split issues")

    return issues


def ensure_well_formed(
    members: Iterable[Member], transactions: Iterable[Transaction]
) -> None:
    """
    Raise if any transaction has a malformed split.

    Raises:
        SplitValidationError: If at least one issue is found
    """
    issues = find_split_issues(members, transactions)
    if issues:
        raise SplitValidationError(issues)
