"""Service layer that composes the ledger computations for a group.

This module provides a higher-level API over the pure balance, settlement,
highlight and export functions, applying the configured currency and split
validation policy.
"""

import logging
from datetime import datetime

from .balances import compute_net_balances
from .config import Settings
from .context import (
    FinancialContext,
    build_financial_context,
    render_financial_context,
)
from .export import export_balances_csv, export_transactions_csv
from .models import (
    Group,
    Highlights,
    LedgerSummary,
    NetBalance,
    Settlement,
    SplitIssue,
)
from .settlement import apply_settlements, compute_settlements
from .stats import spending_in_period, spending_over_time, top_spender, total_spent
from .validation import find_split_issues

logger = logging.getLogger(__name__)


class LedgerService:
    """Service for computing balances, settlements and reports for a group."""

    def __init__(self, settings: Settings):
        """Initialize the ledger service."""
        self.settings = settings

    def currency_for(self, group: Group) -> str:
        """Currency code used to display a group's amounts."""
        return group.currency or self.settings.default_currency

    def net_balances(self, group: Group) -> list[NetBalance]:
        """
        Compute net balances for every member of a group.

        Raises:
            SplitValidationError: If strict_splits is enabled and a split is malformed
        """
        return compute_net_balances(
            group.members, group.transactions, strict=self.settings.strict_splits
        )

    def settlements(self, group: Group) -> list[Settlement]:
        """Compute the transfers that settle a group."""
        return compute_settlements(self.net_balances(group))

    def summarize(self, group: Group) -> LedgerSummary:
        """
        Compute balances and settlements, plus any residual left unsettled.

        A residual only appears when exact/percentage splits don't add up to
        their transaction amounts.

        Args:
            group: The group to summarize

        Returns:
            LedgerSummary for the group
        """
        balances = self.net_balances(group)
        settlements = compute_settlements(balances)
        residual = [b for b in apply_settlements(balances, settlements) if b.balance]

        logger.info(
            f"Group '{group.name}': {len(balances)} balances, "
            f"{len(settlements)} settlements"
        )
        if residual:
            logger.warning(
                f"Group '{group.name}' has {len(residual)} unsettleable balance(s)"
            )

        return LedgerSummary(
            group_id=group.id,
            currency=self.currency_for(group),
            balances=balances,
            settlements=settlements,
            residual=residual,
        )

    def split_issues(self, group: Group) -> list[SplitIssue]:
        """Run strict split validation regardless of the configured policy."""
        return find_split_issues(group.members, group.transactions)

    def highlights(self, group: Group, now: datetime | None = None) -> Highlights:
        """Headline spending statistics for a group."""
        now = now or datetime.now()
        transactions = group.transactions
        return Highlights(
            total_spent=total_spent(transactions),
            weekly_spending=spending_in_period(transactions, "week", now),
            monthly_spending=spending_in_period(transactions, "month", now),
            top_spender=top_spender(transactions, group.members),
            spending_over_time=spending_over_time(transactions),
        )

    def export_transactions(self, group: Group) -> str:
        """Transactions as CSV."""
        return export_transactions_csv(group.transactions, group.members)

    def export_balances(self, group: Group) -> str:
        """Net balances as CSV."""
        return export_balances_csv(self.net_balances(group), group.members)

    def financial_context(
        self, group: Group, now: datetime | None = None
    ) -> FinancialContext:
        """Assistant context for a group."""
        return build_financial_context(
            group,
            now,
            default_currency=self.settings.default_currency,
            strict=self.settings.strict_splits,
        )

    def render_context(self, group: Group, now: datetime | None = None) -> str:
        """Assistant context rendered as Markdown."""
        return render_financial_context(
            self.financial_context(group, now),
            recent_limit=self.settings.recent_transactions_limit,
        )
