"""
Entry point: wire storage, store, router, form controller and UI, then run the Tk loop.
"""

import tkinter as tk

from fieldsurvey.form import EntryForm
from fieldsurvey.logs import attach_panel_handler, configure_logging, get_logger
from fieldsurvey.repository import RecordStore
from fieldsurvey.router import ViewRouter
from fieldsurvey.storage import get_storage_path
from fieldsurvey.ui import AppUI

log = get_logger("fieldsurvey")


def main() -> None:
    configure_logging()
    path = get_storage_path()
    log.info("Using storage file %s", path)

    with RecordStore(path) as store:
        router = ViewRouter()
        form = EntryForm(store, router)

        root = tk.Tk()
        app = AppUI(root, store, router, form)
        panel = attach_panel_handler(app.append_log_line)
        root.mainloop()
        # window is gone; keep the final persist off the panel
        get_logger().removeHandler(panel)


if __name__ == "__main__":
    main()
