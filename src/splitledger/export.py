"""CSV export of transactions and balances."""

import csv
import io
from collections.abc import Sequence

from .currency import to_major_units
from .models import Member, NetBalance, Transaction

TRANSACTION_HEADER = ["id", "title", "amount", "date", "payer", "splitMembers"]
BALANCE_HEADER = ["member", "netBalance"]


def _write_rows(header: list[str], rows: list[list[str]]) -> str:
    """Render rows as CSV with "\\n" line endings and no trailing newline."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(header)
    writer.writerows(rows)
    return buffer.getvalue().rstrip("\n")


def _format_amount(minor_units: int) -> str:
    return f"{to_major_units(minor_units):.2f}"


def export_transactions_csv(
    transactions: Sequence[Transaction], members: Sequence[Member]
) -> str:
    """
    Export transactions as CSV.

    Member ids are replaced by names where known. Amounts are in major units
    with two decimals; split members are joined with ";".

    Args:
        transactions: Transactions to export, in order
        members: Members used to resolve names

    Returns:
        CSV text
    """
    names = {member.id: member.name for member in members}

    rows = []
    for tx in transactions:
        rows.append(
            [
                tx.id,
                tx.title,
                _format_amount(tx.amount),
                tx.occurred_at.isoformat() if tx.occurred_at else "",
                names.get(tx.payer_id, tx.payer_id),
                ";".join(names.get(pid, pid) for pid in tx.participant_ids),
            ]
        )

    return _write_rows(TRANSACTION_HEADER, rows)


def export_balances_csv(
    balances: Sequence[NetBalance], members: Sequence[Member]
) -> str:
    """Export net balances as CSV, one row per member."""
    names = {member.id: member.name for member in members}
    rows = [
        [names.get(b.member_id, b.member_id), _format_amount(b.balance)]
        for b in balances
    ]
    return _write_rows(BALANCE_HEADER, rows)
