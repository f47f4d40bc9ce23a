import customtkinter as ctk

from models.account import ACCOUNT_TYPE_LABELS
from services.portfolio_service import PortfolioService
from utils.constants import ACCOUNT_TYPE_COLORS
from utils.currency import format_currency, format_share


class PortfolioTab(ctk.CTkFrame):
    def __init__(self, master, portfolio_service: PortfolioService, get_accounts, **kwargs):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._svc = portfolio_service
        self._get_accounts = get_accounts   # callable → list[Account]

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)

        self._build_headline()
        self._build_counts()
        self._build_distribution()

    def refresh(self):
        accounts = self._get_accounts()
        summary = self._svc.aggregate(accounts)

        color = "#4CAF50" if summary.total_balance >= 0 else "#F44336"
        self._headline_amount.configure(
            text=format_currency(summary.total_balance), text_color=color,
        )
        if accounts:
            self._headline_subtitle.configure(
                text=f"across {len(summary.by_type)} account types"
            )
        else:
            self._headline_subtitle.configure(
                text="Create your first account to begin tracking your cash flow."
            )
        self._recurring_label.configure(text=str(summary.recurring_count))
        self._one_off_label.configure(text=str(summary.non_recurring_count))

        frame = self._dist_frame
        for w in frame.winfo_children():
            w.destroy()

        row = 0
        for group in summary.by_type:
            label = ACCOUNT_TYPE_LABELS.get(group.account_type, group.account_type)
            ctk.CTkLabel(
                frame, text=label, font=ctk.CTkFont(weight="bold"), anchor="w",
            ).grid(row=row, column=0, sticky="w", padx=(4, 8), pady=(6, 2))
            bar = ctk.CTkProgressBar(
                frame, height=10,
                progress_color=ACCOUNT_TYPE_COLORS.get(group.account_type, "#888888"),
            )
            bar.set(max(0.0, min(group.share / 100, 1.0)))
            bar.grid(row=row, column=1, sticky="ew", padx=4, pady=(6, 2))
            ctk.CTkLabel(frame, text=format_share(group.share), text_color="gray60").grid(
                row=row, column=2, padx=4, pady=(6, 2)
            )
            ctk.CTkLabel(frame, text=format_currency(group.balance), anchor="e").grid(
                row=row, column=3, sticky="e", padx=4, pady=(6, 2)
            )
            row += 1

            for account in self._svc.accounts_of_type(accounts, group.account_type):
                ctk.CTkLabel(
                    frame, text=f"   {account.name}", text_color="gray60", anchor="w",
                ).grid(row=row, column=0, columnspan=2, sticky="w", padx=(4, 8))
                ctk.CTkLabel(
                    frame, text=f"{len(account.movements)} movements", text_color="gray60",
                ).grid(row=row, column=2, padx=4)
                ctk.CTkLabel(
                    frame, text=format_currency(account.balance), text_color="gray60", anchor="e",
                ).grid(row=row, column=3, sticky="e", padx=4)
                row += 1

    # ── Layout builders ───────────────────────────────────────────────────────

    def _build_headline(self):
        card = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        card.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 0))

        self._headline_amount = ctk.CTkLabel(
            card, text="", font=ctk.CTkFont(size=22, weight="bold"),
        )
        self._headline_amount.pack(pady=(12, 2))
        self._headline_subtitle = ctk.CTkLabel(
            card, text="", font=ctk.CTkFont(size=12), text_color="gray60",
        )
        self._headline_subtitle.pack(pady=(0, 10))

    def _build_counts(self):
        cards = ctk.CTkFrame(self, fg_color="transparent")
        cards.grid(row=1, column=0, sticky="ew", padx=8, pady=(8, 0))
        cards.grid_columnconfigure((0, 1), weight=1)

        self._recurring_label = self._count_card(cards, 0, "Recurring movements")
        self._one_off_label = self._count_card(cards, 1, "One-off movements")

    @staticmethod
    def _count_card(parent, column: int, title: str):
        card = ctk.CTkFrame(parent, fg_color=("gray88", "gray18"), corner_radius=8)
        card.grid(row=0, column=column, sticky="ew", padx=4)
        ctk.CTkLabel(card, text=title, text_color="gray60").pack(pady=(8, 0))
        value = ctk.CTkLabel(card, text="0", font=ctk.CTkFont(size=18, weight="bold"))
        value.pack(pady=(0, 8))
        return value

    def _build_distribution(self):
        self._dist_frame = ctk.CTkScrollableFrame(self, label_text="Distribution by account type")
        self._dist_frame.grid(row=2, column=0, sticky="nsew", padx=8, pady=8)
        self._dist_frame.grid_columnconfigure(1, weight=1)
