"""
Design (ui.py)
- Purpose: Build and manage the Tkinter UI: dashboard (cards, table, ratio chart, logs) and
           the entry form screen.
- Inputs: RecordStore (shared state), ViewRouter, EntryForm controller, Dashboard presenter.
- Outputs: None (renders UI, writes to the store through EntryForm).
- Side effects: Creates windows; writes CSV files chosen by the user; fires notifications.
- Thread-safety: UI code runs on main thread; append_log_line reschedules via Tk.after().
"""

import tkinter as tk
from pathlib import Path
from tkinter import filedialog, messagebox, ttk

from . import notify
from .config import APP_TITLE, APP_VERSION, DESIGNATION_OPTIONS, LOG_MAX_LINES, STATUS_OPTIONS
from .dashboard import Dashboard
from .export import export_csv, write_export
from .form import FIELD_LABELS, EntryForm, FormFields
from .logs import get_logger
from .repository import RecordStore
from .router import View, ViewRouter

log = get_logger(__name__)

BG = "#1e1e1e"
PANEL = "#2b2b2b"
FG = "#f0f0f0"
MUTED = "gray"
GREEN = "#10b981"
RED = "#ef4444"
BLUE = "#3b82f6"

CHART_SIZE = 200
CHART_HOLE = 0.6  # inner radius / outer radius


class AppUI:
    """
    Design (AppUI)
    - Purpose: Encapsulate all UI creation and behavior.
    - Public attributes:
        show_logs (tk.BooleanVar): toggles visibility of the logs panel
    - Public methods:
        refresh_ui(): repaint cards, table and chart from the Dashboard presenter
        append_log_line(): thread-safe adapter used by the logging panel handler
    """

    def __init__(self, root: tk.Tk, store: RecordStore, router: ViewRouter, form: EntryForm):
        self.root = root
        self.store = store
        self.router = router
        self.form = form

        self.show_logs = tk.BooleanVar(value=False)

        # Window
        self.root.title(APP_TITLE)
        self.root.rowconfigure(1, weight=1)
        self.root.columnconfigure(0, weight=1)
        self.root.configure(bg=BG)

        self._build_style()

        header = tk.Frame(self.root, bg="#3730a3")
        header.grid(row=0, column=0, sticky="ew")
        tk.Label(header, text=APP_TITLE, fg="white", bg="#3730a3", font=("Segoe UI", 14, "bold")).pack(
            side=tk.LEFT, padx=10, pady=8
        )
        tk.Label(
            header, text=f"v{APP_VERSION} • Local Storage Active", fg="#c7d2fe", bg="#3730a3",
            font=("Segoe UI", 8),
        ).pack(side=tk.RIGHT, padx=10)

        # Paned window: top = active screen, bottom = logs (when shown)
        self.paned = ttk.PanedWindow(self.root, orient=tk.VERTICAL)
        self.paned.grid(row=1, column=0, sticky="nsew")

        self.screen = tk.Frame(self.paned, bg=BG)
        self.screen.rowconfigure(0, weight=1)
        self.screen.columnconfigure(0, weight=1)
        self.paned.add(self.screen, weight=1)

        self.bottom_frame = tk.Frame(self.paned, bg=BG)
        self.logs_box = tk.Text(self.bottom_frame, height=6, bg="#1b1b1b", fg="#dddddd", wrap="none")
        self.logs_box.configure(state="disabled")
        self.logs_box.pack(fill=tk.BOTH, expand=True, padx=10, pady=(0, 6))
        self.logs_box.pack_forget()  # hidden by default
        self.paned.add(self.bottom_frame, weight=0)

        def _keep_sash_collapsed(_event=None):
            """When Logs is unchecked, keep sash at bottom so window can resize down."""
            if not self.show_logs.get():
                self.paned.update_idletasks()
                total = self.paned.winfo_height()
                if total > 0:
                    self.paned.sashpos(0, total)

        self.paned.bind("<Configure>", _keep_sash_collapsed)

        self.dashboard_frame = self._build_dashboard(self.screen)
        self.form_frame = tk.Frame(self.screen, bg=BG)
        self._form_vars: dict[str, tk.StringVar] = {}
        self._remarks_box: tk.Text | None = None
        self._error_label: tk.Label | None = None

        self.presenter = Dashboard(store)
        self.presenter.on_update = self.refresh_ui
        self.router.on_change(self.show_view)
        self.show_view(self.router.current)

    # ---------- Layout ----------

    def _build_style(self) -> None:
        style = ttk.Style(self.root)
        style.theme_use("default")
        style.configure(
            "Treeview",
            background=PANEL,
            foreground=FG,
            fieldbackground=PANEL,
            rowheight=24,
            font=("Segoe UI", 10),
        )
        style.configure(
            "Treeview.Heading",
            background=BG,
            foreground="#ffffff",
            font=("Segoe UI", 10, "bold"),
        )
        style.map("Treeview", background=[('selected', '#444')], foreground=[])

    def _build_dashboard(self, parent: tk.Frame) -> tk.Frame:
        frame = tk.Frame(parent, bg=BG)
        frame.columnconfigure(0, weight=3)
        frame.columnconfigure(1, weight=1)
        frame.rowconfigure(3, weight=1)

        # Title + actions
        top = tk.Frame(frame, bg=BG)
        top.grid(row=0, column=0, columnspan=2, sticky="ew", padx=10, pady=(10, 5))
        tk.Label(top, text="Dashboard", fg="white", bg=BG, font=("Segoe UI", 16, "bold")).pack(anchor="w")
        tk.Label(
            top, text="Overview of beneficiary re-superchecking status.", fg=MUTED, bg=BG
        ).pack(anchor="w")
        actions = tk.Frame(top, bg=BG)
        actions.pack(anchor="e")
        ttk.Button(actions, text="Export to CSV", command=self.export).pack(side=tk.LEFT, padx=5)
        ttk.Button(actions, text="Add New Record", command=self.router.open_form).pack(side=tk.LEFT, padx=5)

        # Stat cards
        cards = tk.Frame(frame, bg=BG)
        cards.grid(row=1, column=0, columnspan=2, sticky="ew", padx=10, pady=5)
        self.card_values: dict[str, tk.Label] = {}
        for i, (key, title, color) in enumerate(
            (("total", "Total Checked", BLUE), ("eligible", "Found Eligible", GREEN), ("ineligible", "Ineligible", RED))
        ):
            cards.columnconfigure(i, weight=1)
            card = tk.Frame(cards, bg=PANEL, highlightbackground=color, highlightthickness=1)
            card.grid(row=0, column=i, sticky="ew", padx=5)
            tk.Label(card, text=title, fg=MUTED, bg=PANEL).pack(anchor="w", padx=10, pady=(8, 0))
            value = tk.Label(card, text="0", fg=color, bg=PANEL, font=("Segoe UI", 20, "bold"))
            value.pack(anchor="w", padx=10, pady=(0, 8))
            self.card_values[key] = value

        tk.Label(frame, text="Recent Entries", fg="white", bg=BG, font=("Segoe UI", 11, "bold")).grid(
            row=2, column=0, sticky="w", padx=10, pady=(10, 0)
        )
        tk.Label(frame, text="Eligibility Ratio", fg="white", bg=BG, font=("Segoe UI", 11, "bold")).grid(
            row=2, column=1, sticky="w", padx=10, pady=(10, 0)
        )

        # Records table
        self.columns = ("serial", "name", "beneficiary_id", "location", "status", "superior", "timestamp")
        headers = {
            "serial": "S.No",
            "name": "Beneficiary",
            "beneficiary_id": "Beneficiary ID",
            "location": "Village, GP",
            "status": "Status",
            "superior": "Verified By",
            "timestamp": "Date",
        }
        self.tree = ttk.Treeview(frame, columns=self.columns, show="headings")
        for col in self.columns:
            self.tree.heading(col, text=headers[col])
            self.tree.column(col, width=110, stretch=True)
        self.tree.tag_configure("Eligible", foreground="#7CFC00")
        self.tree.tag_configure("Ineligible", foreground="#FF6A6A")
        self.tree.grid(row=3, column=0, sticky="nsew", padx=10, pady=(5, 10))

        # Ratio chart + legend
        chart_box = tk.Frame(frame, bg=PANEL)
        chart_box.grid(row=3, column=1, sticky="nsew", padx=10, pady=(5, 10))
        self.chart = tk.Canvas(chart_box, width=CHART_SIZE, height=CHART_SIZE, bg=PANEL, highlightthickness=0)
        self.chart.pack(padx=10, pady=10)
        self.legend_labels = [
            tk.Label(chart_box, fg=GREEN, bg=PANEL),
            tk.Label(chart_box, fg=RED, bg=PANEL),
        ]
        for label in self.legend_labels:
            label.pack(anchor="center")

        tk.Checkbutton(
            frame,
            text="Show Logs",
            variable=self.show_logs,
            fg="white",
            bg=BG,
            selectcolor=PANEL,
            activebackground=BG,
            activeforeground="white",
            command=self.toggle_logs,
        ).grid(row=4, column=0, sticky="w", padx=10, pady=(0, 10))
        return frame

    def _build_form(self) -> None:
        """(Re)build the entry form with fresh values: serial number prefilled, status Eligible."""
        for child in self.form_frame.winfo_children():
            child.destroy()
        fields = self.form.new_fields()
        self._form_vars = {}

        tk.Label(self.form_frame, text="New Verification Entry", fg="white", bg=BG, font=("Segoe UI", 14, "bold")).grid(
            row=0, column=0, columnspan=3, sticky="w", padx=10, pady=(10, 5)
        )

        layout = [
            ("serial_number", "entry"),
            ("block_name", "entry"),
            ("gp_name", "entry"),
            ("village", "entry"),
            ("latitude", "entry"),
            ("longitude", "entry"),
            ("beneficiary_id", "entry"),
            ("beneficiary_name", "entry"),
            ("status", "status"),
            ("remarks", "text"),
            ("superior_name", "entry"),
            ("superior_designation", "designation"),
            ("superior_id_srh", "entry"),
        ]
        for row, (name, kind) in enumerate(layout, start=1):
            tk.Label(self.form_frame, text=FIELD_LABELS[name], fg="white", bg=BG).grid(
                row=row, column=0, sticky="e", padx=5, pady=3
            )
            if kind == "text":
                box = tk.Text(self.form_frame, height=3, width=40)
                box.insert("1.0", fields.remarks)
                box.grid(row=row, column=1, sticky="w", padx=5, pady=3)
                self._remarks_box = box
                tk.Label(
                    self.form_frame, text="Explain why when Ineligible.", fg=MUTED, bg=BG, font=("Segoe UI", 8)
                ).grid(row=row, column=2, sticky="w", padx=(0, 5))
                continue
            var = tk.StringVar(value=getattr(fields, name))
            self._form_vars[name] = var
            if kind == "status":
                widget = ttk.Combobox(self.form_frame, textvariable=var, values=STATUS_OPTIONS, state="readonly")
            elif kind == "designation":
                widget = ttk.Combobox(self.form_frame, textvariable=var, values=DESIGNATION_OPTIONS)
            else:
                widget = tk.Entry(self.form_frame, textvariable=var, width=40)
            widget.grid(row=row, column=1, sticky="w", padx=5, pady=3)
            if name in ("latitude", "longitude"):
                tk.Label(self.form_frame, text="Optional, decimal degrees.", fg=MUTED, bg=BG, font=("Segoe UI", 8)).grid(
                    row=row, column=2, sticky="w", padx=(0, 5)
                )

        self._error_label = tk.Label(self.form_frame, text="", fg=RED, bg=BG, justify="left")
        self._error_label.grid(row=len(layout) + 1, column=0, columnspan=3, sticky="w", padx=10)

        buttons = tk.Frame(self.form_frame, bg=BG)
        buttons.grid(row=len(layout) + 2, column=0, columnspan=3, pady=10)
        ttk.Button(buttons, text="Save", command=self.save_entry).pack(side=tk.LEFT, padx=5)
        ttk.Button(buttons, text="Cancel", command=self.form.cancel).pack(side=tk.LEFT, padx=5)

    # ---------- Router ----------

    def show_view(self, view: View) -> None:
        if view == View.FORM:
            self.dashboard_frame.grid_forget()
            self._build_form()
            self.form_frame.grid(row=0, column=0, sticky="nsew")
        else:
            self.form_frame.grid_forget()
            self.dashboard_frame.grid(row=0, column=0, sticky="nsew")
            self.refresh_ui()

    # ---------- Form actions ----------

    def _collect_fields(self) -> FormFields:
        values = {name: var.get() for name, var in self._form_vars.items()}
        remarks = self._remarks_box.get("1.0", "end-1c") if self._remarks_box is not None else ""
        return FormFields(remarks=remarks, **values)

    def save_entry(self) -> None:
        """
        Purpose: Submit the form. On failure show which fields are missing and stay on the form.
        Side effects: On success the store appends + persists and the router returns to dashboard.
        """
        result = self.form.submit(self._collect_fields())
        if not result.ok:
            text = f"Please fill in: {result.describe()}"
            if self._error_label is not None:
                self._error_label.configure(text=text)
            messagebox.showerror("Add New Record", text)
            return
        record = result.record
        notify.record_saved(record.serial_number, record.beneficiary_name)

    # ---------- Dashboard ----------

    def refresh_ui(self) -> None:
        """
        Purpose: Repaint cards, table and chart from the presenter.
        Thread-safety: Must run on main thread.
        """
        stats = self.presenter.stats
        self.card_values["total"].configure(text=str(stats.total))
        self.card_values["eligible"].configure(text=str(stats.eligible))
        self.card_values["ineligible"].configure(text=str(stats.ineligible))

        self.tree.delete(*self.tree.get_children())
        for row in self.presenter.rows:
            self.tree.insert("", "end", values=row, tags=(row[4],))

        for label, text in zip(self.legend_labels, self.presenter.legend):
            label.configure(text=f"● {text}")
        self._draw_chart()

    def _draw_chart(self) -> None:
        self.chart.delete("all")
        slices = self.presenter.slices
        if not slices:
            self.chart.create_text(
                CHART_SIZE / 2, CHART_SIZE / 2, text="No data available", fill=MUTED, font=("Segoe UI", 10)
            )
            return
        pad = 10
        box = (pad, pad, CHART_SIZE - pad, CHART_SIZE - pad)
        total = sum(count for _, count, _ in slices)
        start = 90.0
        for (label, count, _pct), color in zip(slices, (GREEN, RED)):
            if count == 0:
                continue
            if count == total:
                self.chart.create_oval(*box, fill=color, outline=color)
                break
            extent = -360.0 * count / total
            self.chart.create_arc(*box, start=start, extent=extent, fill=color, outline=PANEL, width=2)
            start += extent
        hole = (CHART_SIZE - 2 * pad) * CHART_HOLE / 2
        c = CHART_SIZE / 2
        self.chart.create_oval(c - hole, c - hole, c + hole, c + hole, fill=PANEL, outline=PANEL)

    def export(self) -> None:
        """
        Purpose: Export every record to CSV through a Save As dialog (suggested filename is
                 dated by today). Cancelling the dialog writes nothing.
        """
        records = self.store.snapshot()
        artifact = export_csv(records)
        downloads = Path.home() / "Downloads"
        target = filedialog.asksaveasfilename(
            parent=self.root,
            title="Export to CSV",
            initialdir=str(downloads if downloads.is_dir() else Path.home()),
            initialfile=artifact.filename,
            defaultextension=".csv",
            filetypes=[("CSV files", "*.csv"), ("All files", "*.*")],
        )
        if not target:
            return
        try:
            path = write_export(artifact, Path(target))
        except OSError as exc:
            log.error("Export to %s failed: %s", target, exc)
            messagebox.showerror("Export to CSV", f"Could not write {target}:\n{exc}")
            return
        notify.export_done(path.name, len(records))

    # ---------- Logs ----------

    def toggle_logs(self) -> None:
        """Show logs in bottom pane. Resize pane to show/hide."""
        if self.show_logs.get():
            self.paned.pane(self.bottom_frame, weight=1)
            self.logs_box.pack(fill=tk.BOTH, expand=True, padx=10, pady=(0, 6))
            self.paned.update_idletasks()
            total = self.paned.winfo_height()
            if total > 0:
                self.paned.sashpos(0, int(total * 0.8))
        else:
            self.logs_box.pack_forget()
            self.paned.pane(self.bottom_frame, weight=0)
            self.paned.update_idletasks()
            total = self.paned.winfo_height()
            if total > 0:
                self.paned.sashpos(0, total)

    def append_log_line(self, line: str) -> None:
        """Sink for LogPanelHandler; safe from any thread."""
        self.root.after(0, lambda: self._append_log(line))

    def _append_log(self, text: str) -> None:
        """
        Purpose: Append one line to the Logs panel and trim to LOG_MAX_LINES.
        Thread-safety: Main thread only (called via after()).
        """
        self.logs_box.configure(state="normal")
        self.logs_box.insert("end", text)
        self.logs_box.see("end")
        total_lines = int(self.logs_box.index("end-1c").split(".")[0])
        if total_lines > LOG_MAX_LINES:
            remove = total_lines - LOG_MAX_LINES
            self.logs_box.delete("1.0", f"{remove + 1}.0")
        self.logs_box.configure(state="disabled")
