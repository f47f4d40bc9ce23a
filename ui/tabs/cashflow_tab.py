import customtkinter as ctk
from matplotlib.figure import Figure
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg

from models.account import Account
from models.cashflow import CashflowSummary, ProjectionPoint
from services.cashflow_service import CashflowService
from services.errors import CollaboratorError
from services.movement_service import MovementService
from ui.components.confirm_dialog import ConfirmDialog
from utils.currency import format_signed
from utils.date_helpers import format_display_date, utc_now


class CashflowTab(ctk.CTkFrame):
    def __init__(
        self,
        master,
        cashflow_service: CashflowService,
        movement_service: MovementService,
        get_account,        # callable → Account | None
        user_id: str,
        notify_refresh,
        on_error,           # callable(str) shows an inline error
        date_format: str = "MMM D, YYYY",
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._svc = cashflow_service
        self._movement_svc = movement_service
        self._get_account = get_account
        self._user_id = user_id
        self._notify_refresh = notify_refresh
        self._on_error = on_error
        self._date_format = date_format
        self._limit = cashflow_service.settings.ledger_display_limit

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        self._build_chart_area()
        self._build_tables()

    def refresh(self):
        account = self._get_account()
        summary = self._svc.summarize(account, utc_now())
        self._draw_projection(summary.projection, account)
        self._populate_past(summary)
        self._populate_upcoming(summary)

    # ── Layout ───────────────────────────────────────────────────────────────

    def _build_chart_area(self):
        outer = ctk.CTkFrame(self, fg_color=("gray90", "gray20"), corner_radius=8)
        outer.grid(row=0, column=0, sticky="ew", padx=8, pady=8)

        self._chart_title = ctk.CTkLabel(
            outer, text="Balance trend",
            font=ctk.CTkFont(size=13, weight="bold"),
        )
        self._chart_title.pack(pady=(10, 0))

        self._chart_fig = Figure(figsize=(8, 2.8), dpi=80, tight_layout=True)
        self._chart_ax = self._chart_fig.add_subplot(111)
        self._chart_mpl = FigureCanvasTkAgg(self._chart_fig, master=outer)
        self._chart_mpl.get_tk_widget().pack(fill="x", expand=True, padx=8, pady=(4, 8))

    def _build_tables(self):
        bottom = ctk.CTkFrame(self, fg_color="transparent")
        bottom.grid(row=1, column=0, sticky="nsew", padx=8, pady=(0, 8))
        bottom.grid_columnconfigure((0, 1), weight=1)
        bottom.grid_rowconfigure(0, weight=1)

        self._past_frame = ctk.CTkScrollableFrame(bottom, label_text="Past movements")
        self._past_frame.grid(row=0, column=0, sticky="nsew", padx=(0, 4))
        self._past_frame.grid_columnconfigure(0, weight=1)

        self._upcoming_frame = ctk.CTkScrollableFrame(bottom, label_text="Upcoming")
        self._upcoming_frame.grid(row=0, column=1, sticky="nsew", padx=(4, 0))
        self._upcoming_frame.grid_columnconfigure(0, weight=1)

    def _style_ax(self, ax, fig):
        is_dark = ctk.get_appearance_mode() == "Dark"
        bg = "#2b2b2b" if is_dark else "#e4e4e4"
        fg = "#aaaaaa" if is_dark else "#444444"
        fig.patch.set_facecolor(bg)
        ax.set_facecolor(bg)
        ax.tick_params(colors=fg, labelsize=8)
        for spine in ax.spines.values():
            spine.set_edgecolor(fg)

    # ── Chart drawing ─────────────────────────────────────────────────────────

    def _draw_projection(self, points: list[ProjectionPoint], account: Account | None):
        ax = self._chart_ax
        ax.clear()
        self._style_ax(ax, self._chart_fig)
        self._chart_title.configure(
            text=f"Balance trend · {account.name}" if account else "Balance trend"
        )

        if not points:
            ax.text(0.5, 0.5, "No account selected", ha="center", va="center",
                    transform=ax.transAxes, color="gray")
            self._chart_mpl.draw_idle()
            return

        history = [p for p in points if not p.is_projected]
        projected = [p for p in points if p.is_projected]
        ax.plot([p.date for p in history], [p.value for p in history],
                color="#2196F3", marker="o", markersize=3)
        if projected:
            # Dashed continuation from the last historical point
            bridge = history[-1:] + projected
            ax.plot([p.date for p in bridge], [p.value for p in bridge],
                    color="#FF9800", linestyle="--", marker="o", markersize=3)
        ax.yaxis.set_major_formatter(
            lambda v, _: f"{v/1000:.0f}k" if abs(v) >= 1000 else f"{v:.0f}"
        )
        self._chart_fig.autofmt_xdate()
        self._chart_mpl.draw_idle()

    # ── Table population ─────────────────────────────────────────────────────

    def _populate_past(self, summary: CashflowSummary):
        frame = self._past_frame
        for w in frame.winfo_children():
            w.destroy()
        if not summary.past:
            ctk.CTkLabel(frame, text="No movements yet", text_color="gray60").grid(row=0, column=0)
            return

        for i, entry in enumerate(summary.past[:self._limit]):
            self._row(frame, i, format_display_date(entry.occurs_at, self._date_format),
                      entry.cadence_label, entry.amount)
            ctk.CTkButton(
                frame, text="✕", width=24, height=22,
                fg_color="transparent", text_color=("gray30", "gray70"),
                command=lambda mid=entry.movement_id: self._delete_movement(mid),
            ).grid(row=i, column=3, padx=(4, 0), pady=2)

    def _populate_upcoming(self, summary: CashflowSummary):
        frame = self._upcoming_frame
        for w in frame.winfo_children():
            w.destroy()
        if not summary.upcoming:
            ctk.CTkLabel(frame, text="Nothing scheduled", text_color="gray60").grid(row=0, column=0)
            return

        for i, entry in enumerate(summary.upcoming[:self._limit]):
            self._row(frame, i, format_display_date(entry.next_date, self._date_format),
                      entry.cadence_label, entry.amount)

    @staticmethod
    def _row(frame, row: int, date_text: str, cadence_text: str, amount: float):
        ctk.CTkLabel(frame, text=date_text, anchor="w").grid(
            row=row, column=0, sticky="w", padx=(4, 8), pady=2
        )
        ctk.CTkLabel(frame, text=cadence_text, text_color="gray60").grid(
            row=row, column=1, padx=4, pady=2
        )
        ctk.CTkLabel(
            frame, text=format_signed(amount),
            text_color="#4CAF50" if amount >= 0 else "#F44336", anchor="e",
        ).grid(row=row, column=2, sticky="e", padx=4, pady=2)

    def _delete_movement(self, movement_id: int):
        dlg = ConfirmDialog(self, "Delete Movement", "Delete this movement? This cannot be undone.")
        if not dlg.result:
            return
        try:
            self._movement_svc.delete(self._user_id, movement_id)
        except CollaboratorError as e:
            self._on_error(str(e))
            return
        self._notify_refresh()
