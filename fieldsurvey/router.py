"""
Design (router.py)
- Purpose: Two-state switch between the dashboard and the entry form.
- Transitions: DASHBOARD -> FORM (open_form); FORM -> DASHBOARD (show_dashboard, after
               submit or cancel). No history, no other states.
- Side effects: Listeners are called with the new view when it changes.
"""

from enum import Enum
from typing import Callable, List


class View(str, Enum):
    DASHBOARD = "dashboard"
    FORM = "form"


class ViewRouter:
    def __init__(self) -> None:
        self.current = View.DASHBOARD
        self._listeners: List[Callable[[View], None]] = []

    def on_change(self, listener: Callable[[View], None]) -> None:
        self._listeners.append(listener)

    def open_form(self) -> None:
        self._go(View.FORM)

    def show_dashboard(self) -> None:
        self._go(View.DASHBOARD)

    def _go(self, view: View) -> None:
        if view == self.current:
            return
        self.current = view
        for listener in list(self._listeners):
            listener(view)
