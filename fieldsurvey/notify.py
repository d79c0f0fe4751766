"""
Design (notify.py)
- Purpose: Desktop notifications for completed actions (record saved, CSV exported).
- Inputs: Title and message text.
- Outputs: None.
- Side effects: Shows an OS notification through plyer when a backend is available.
- Thread-safety: Safe; no shared state.
"""

from plyer import notification

from .config import APP_TITLE, NOTIFY_TIMEOUT_SEC
from .logs import get_logger

log = get_logger(__name__)


def notify(message: str, title: str = APP_TITLE) -> None:
    """
    Purpose: Fire a desktop notification.
    Side effects: plyer raises NotImplementedError on platforms without a backend (and some
                  backends fail when no notification daemon runs); both are logged and ignored.
    """
    try:
        notification.notify(title=title, message=message, timeout=NOTIFY_TIMEOUT_SEC)
    except (NotImplementedError, OSError, ValueError) as exc:
        log.debug("Desktop notification unavailable: %s", exc)


def record_saved(serial_number: str, beneficiary_name: str) -> None:
    notify(f"Record {serial_number} saved for {beneficiary_name}")


def export_done(filename: str, count: int) -> None:
    notify(f"Exported {count} record(s) to {filename}")
