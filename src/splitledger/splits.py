"""Per-participant share computation for each split mode."""

from decimal import ROUND_HALF_UP, Decimal

from .models import EqualSplit, ExactSplit, PercentageSplit, Transaction


def round_half_up(value: Decimal) -> int:
    """
    Round a Decimal to the nearest integer, halves away from zero.

    Args:
        value: Amount as Decimal

    Returns:
        Rounded integer
    """
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def split_equally(amount: int, count: int) -> list[int]:
    """
    Split an amount into `count` integer shares that sum to the amount exactly.

    Every share gets the floor; the leftover cents go one each to the first
    shares, so split_equally(100, 3) == [34, 33, 33].

    Args:
        amount: Total in minor units
        count: Number of shares

    Returns:
        List of shares (empty if count is 0)
    """
    if count <= 0:
        return []

    base, remainder = divmod(amount, count)
    return [base + 1 if i < remainder else base for i in range(count)]


def percentage_share(amount: int, percentage: float) -> int:
    """Share of `amount` for a percentage, rounded half-up to a whole cent."""
    # str() keeps 33.3 as 33.3 instead of its binary float expansion
    exact = Decimal(amount) * Decimal(str(percentage)) / Decimal(100)
    return round_half_up(exact)


def compute_shares(transaction: Transaction) -> list[tuple[str, int]]:
    """
    Compute what each participant owes for a transaction.

    Exact and percentage shares are taken as given: they are not checked
    against the transaction amount.

    Args:
        transaction: The transaction to split

    Returns:
        (member_id, share) pairs in participant order
    """
    participants = transaction.participant_ids
    split = transaction.split

    if isinstance(split, ExactSplit):
        return [(pid, split.shares.get(pid, 0)) for pid in participants]

    if isinstance(split, PercentageSplit):
        return [
            (pid, percentage_share(transaction.amount, split.percentages.get(pid, 0)))
            for pid in participants
        ]

    assert isinstance(split, EqualSplit), f"Unhandled split mode: {split.mode}"
    shares = split_equally(transaction.amount, len(participants))
    return list(zip(participants, shares))
