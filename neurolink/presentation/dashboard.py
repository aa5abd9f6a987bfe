"""
Console dashboard

Text rendition of the NeuroLink dashboard: metric cards with trend badges,
EEG band bars, the AI assistant panel and the connection badge. It pulls
values from a BCISession and re-renders the status line on state changes.
"""

import logging
import sys
from typing import Optional, TextIO

from ..core.data_types import BiometricSnapshot, MentalState
from ..engine.session import BCISession

TABS = ("dashboard", "signals", "chat", "training")

# (title, snapshot field, unit)
METRIC_CARDS = (
    ("Focus Level", "focus", "%"),
    ("Stress Level", "stress", "%"),
    ("Heart Rate", "heart_rate", "BPM"),
    ("Fatigue Level", "fatigue", "%"),
)

BAR_WIDTH = 20


def _bar(value: float, width: int = BAR_WIDTH) -> str:
    filled = int(round(max(0.0, min(100.0, value)) / 100.0 * width))
    return "#" * filled + "." * (width - filled)


def format_status_line(snapshot: BiometricSnapshot, state: MentalState) -> str:
    """One-line summary printed whenever the mental state changes"""
    return (f"State: {state.label:>10} | Focus: {snapshot.focus:5.1f} | "
            f"Stress: {snapshot.stress:5.1f} | Fatigue: {snapshot.fatigue:5.1f} | "
            f"HR: {snapshot.heart_rate:5.1f}")


class ConsoleDashboard:
    """
    Presentation adapter writing the dashboard to a text stream

    The adapter only reads from the session and forwards user intents to it;
    it never drives the simulation.
    """

    def __init__(self, session: BCISession, stream: Optional[TextIO] = None,
                 live: bool = True):
        self.session = session
        self.stream = stream or sys.stdout
        self.active_tab = "dashboard"
        self._unsubscribe = []
        if live:
            self._unsubscribe.append(session.on_state_change(self._on_state_change))

    def close(self) -> None:
        for unsubscribe in self._unsubscribe:
            unsubscribe()
        self._unsubscribe = []

    def _on_state_change(self, state: MentalState) -> None:
        self.stream.write(format_status_line(self.session.get_current_snapshot(), state) + "\n")
        self.stream.flush()

    # Intents -----------------------------------------------------------

    def select_tab(self, tab: str) -> bool:
        if tab not in TABS:
            logging.warning(f"Unknown tab: {tab!r}")
            return False
        self.active_tab = tab
        return self.session.handle_intent("tab", tab)

    def accept_suggestion(self) -> bool:
        return self.session.handle_intent("accept_suggestion", self.session.get_current_state())

    def modify_suggestion(self) -> bool:
        return self.session.handle_intent("modify_suggestion", self.session.get_current_state())

    # Rendering ---------------------------------------------------------

    def render(self) -> str:
        """Render the active tab and return the text"""
        if self.active_tab == "signals":
            text = self._render_signals()
        elif self.active_tab == "dashboard":
            text = self._render_dashboard()
        else:
            text = f"[{self.active_tab}] static content\n"
        return self._render_header() + text

    def show(self) -> None:
        self.stream.write(self.render())
        self.stream.flush()

    def _render_header(self) -> str:
        badge = "BCI Connected" if self.session.is_connected else "BCI Disconnected"
        return f"NeuroLink BCI  [{badge}]  tab: {self.active_tab}\n"

    def _render_dashboard(self) -> str:
        snapshot = self.session.get_current_snapshot()
        history = self.session.history
        lines = []
        for title, name, unit in METRIC_CARDS:
            value = getattr(snapshot, name)
            trend = history.trend(name) if name != "fatigue" else None
            badge = f"  ({trend:+.1f}%)" if trend is not None else ""
            lines.append(f"  {title:<14} {round(value):>4} {unit}{badge}")
        lines.append(self._render_bands(snapshot))
        lines.append(self._render_assistant())
        lines.append(self._render_trends())
        return "\n".join(lines) + "\n"

    def _render_signals(self) -> str:
        return self._render_bands(self.session.get_current_snapshot()) + "\n"

    def _render_bands(self, snapshot: BiometricSnapshot) -> str:
        lines = ["  EEG Brain Waves"]
        for band in ("alpha", "beta", "theta", "delta"):
            value = getattr(snapshot.eeg, band)
            lines.append(f"    {band.capitalize():<6} {_bar(value)} {value:5.1f}")
        return "\n".join(lines)

    def _render_assistant(self) -> str:
        state = self.session.get_current_state()
        message = state.message or "..."
        return f"  AI Assistant - Neural State: {state.label}\n    {message}"

    def _render_trends(self) -> str:
        lines = ["  Biometric Trends"]
        for point in self.session.get_history():
            lines.append(f"    {point.timestamp:>8}  focus {point.focus:5.1f}  "
                         f"stress {point.stress:5.1f}  hr {point.heart_rate:5.1f}")
        return "\n".join(lines)
