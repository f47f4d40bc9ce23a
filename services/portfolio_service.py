from models.account import Account
from models.cashflow import PortfolioSummary, TypeSummary


class PortfolioService:
    def aggregate(self, accounts: list[Account]) -> PortfolioSummary:
        """Roll balances and movement counts up by account type."""
        totals: dict[str, dict] = {}
        recurring_count = 0
        non_recurring_count = 0

        for account in accounts:
            group = totals.setdefault(account.account_type, {"balance": 0.0, "movements": 0})
            group["balance"] += account.balance
            group["movements"] += len(account.movements)

            for movement in account.movements:
                if movement.is_recurring:
                    recurring_count += 1
                else:
                    non_recurring_count += 1

        total_balance = sum(g["balance"] for g in totals.values())

        by_type = [
            TypeSummary(
                account_type=account_type,
                balance=g["balance"],
                movements=g["movements"],
                share=0.0 if total_balance == 0 else g["balance"] / total_balance * 100,
            )
            for account_type, g in totals.items()
        ]
        by_type.sort(key=lambda t: (-t.balance, t.account_type))

        return PortfolioSummary(
            total_balance=total_balance,
            by_type=by_type,
            recurring_count=recurring_count,
            non_recurring_count=non_recurring_count,
        )

    @staticmethod
    def accounts_of_type(accounts: list[Account], account_type: str) -> list[Account]:
        return [a for a in accounts if a.account_type == account_type]
