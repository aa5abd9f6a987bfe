"""
Simulated BCI session

This module drives the simulation: a repeating generation tick produces new
snapshots and chart points, and a debounced settle timer classifies the latest
snapshot once it has stopped changing. ``BCISession`` is the surface the
presentation layer talks to.
"""

import logging
import math
import threading
from datetime import timedelta
from typing import Any, Callable, List, Optional, Tuple

from ..core.config import SimulationConfig, clamp_snapshot, validate_config
from ..core.data_types import BiometricSnapshot, HistoryPoint, MentalState, FOCUSED
from ..core.exceptions import ConfigurationError
from ..acquisition.simulator import SignalGenerator
from ..processing.history import HistoryBuffer
from ..detection.state_classifier import StateClassifier
from .timeline import Timeline, RealTimeline

IDLE = "idle"
RUNNING = "running"

# Intents the dashboard may send; accepted and recorded, not acted upon
KNOWN_INTENTS = ("tab", "accept_suggestion", "modify_suggestion")


class SessionScheduler:
    """
    Own the generation tick and the classification settle timer

    State machine: idle -> running (start) -> idle (stop). While running the
    tick repeats every ``tick_interval`` and each snapshot change cancels and
    re-arms the settle timer, so ``on_settle`` only ever sees the newest
    snapshot. ``stop`` cancels both timers and no callback runs afterwards.
    """

    def __init__(self, timeline: Timeline, tick_interval: float, settle_delay: float,
                 on_tick: Callable[[], None], on_settle: Callable[[], None]):
        if not math.isfinite(tick_interval) or tick_interval <= 0:
            raise ConfigurationError(f"Tick interval must be positive, got {tick_interval}")
        if not math.isfinite(settle_delay) or settle_delay < 0:
            raise ConfigurationError(f"Settle delay must be >= 0, got {settle_delay}")
        self.timeline = timeline
        self.tick_interval = tick_interval
        self.settle_delay = settle_delay
        self.on_tick = on_tick
        self.on_settle = on_settle
        self.state = IDLE
        self.lock = threading.RLock()
        self._tick_handle = None
        self._settle_handle = None

    @property
    def is_running(self) -> bool:
        return self.state == RUNNING

    @property
    def settle_pending(self) -> bool:
        return self._settle_handle is not None

    def start(self) -> None:
        with self.lock:
            if self.state == RUNNING:
                return
            self.state = RUNNING
            self.timeline.start()
            self._tick_handle = self.timeline.call_later(self.tick_interval, self._tick)
            # Classify the current snapshot once it settles
            self._arm_settle()
            logging.info(f"Scheduler running (tick {self.tick_interval}s, settle {self.settle_delay}s)")

    def stop(self) -> None:
        with self.lock:
            if self.state == IDLE:
                return
            self.state = IDLE
            self.timeline.cancel(self._tick_handle)
            self.timeline.cancel(self._settle_handle)
            self._tick_handle = None
            self._settle_handle = None
        self.timeline.shutdown()
        logging.info("Scheduler stopped")

    def snapshot_changed(self) -> None:
        """Restart the settle timer after a snapshot change"""
        with self.lock:
            if self.state == RUNNING:
                self._arm_settle()

    def _arm_settle(self) -> None:
        self.timeline.cancel(self._settle_handle)
        self._settle_handle = self.timeline.call_later(self.settle_delay, self._settle)

    def _tick(self) -> None:
        with self.lock:
            if self.state != RUNNING:
                return
            self._tick_handle = self.timeline.call_later(self.tick_interval, self._tick)
            self.on_tick()
            # A handler may have stopped the session during the tick
            if self.state != RUNNING:
                return
            self._arm_settle()

    def _settle(self) -> None:
        with self.lock:
            if self.state != RUNNING:
                return
            self._settle_handle = None
            self.on_settle()


class BCISession:
    """
    Closed-loop simulated BCI session

    Wires the signal generator, history buffer and state classifier to the
    scheduler, and publishes snapshots and state changes to subscribers.
    Handlers are called synchronously, in subscription order, on the timeline
    thread; a failing handler is logged and does not stop the session.
    """

    def __init__(self, config: Optional[SimulationConfig] = None,
                 timeline: Optional[Timeline] = None,
                 generator: Optional[SignalGenerator] = None,
                 classifier: Optional[StateClassifier] = None):
        self.config = config or SimulationConfig()
        validate_config(self.config)

        self.timeline = timeline or RealTimeline()
        self.generator = generator or SignalGenerator(self.config)
        self.classifier = classifier or StateClassifier.from_config(self.config)
        self.history = HistoryBuffer(self.config.history_capacity, self.config.initial_history())

        self.is_connected = True
        self.last_intent: Optional[Tuple[str, Any]] = None
        self.n_ticks = 0
        self.n_classifications = 0

        self._snapshot = self.config.initial_snapshot
        self._state = MentalState(FOCUSED)
        self._t0: Optional[float] = None
        self._snapshot_handlers: List[Callable[[BiometricSnapshot], None]] = []
        self._state_handlers: List[Callable[[MentalState], None]] = []

        self.scheduler = SessionScheduler(
            self.timeline,
            tick_interval=self.config.tick_interval,
            settle_delay=self.config.settle_delay,
            on_tick=self._on_tick,
            on_settle=self._on_settle,
        )

    # ------------------------------------------------------------------
    # Presentation interface
    # ------------------------------------------------------------------

    def get_current_snapshot(self) -> BiometricSnapshot:
        return self._snapshot

    def get_history(self) -> Tuple[HistoryPoint, ...]:
        return self.history.snapshot()

    def get_current_state(self) -> MentalState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self.scheduler.is_running

    def start(self) -> None:
        if self._t0 is None:
            self._t0 = self.timeline.now()
        logging.info("Starting simulated BCI session")
        self.scheduler.start()

    def stop(self) -> None:
        """Stop both timers; calling it again is a no-op"""
        self.scheduler.stop()

    def on_snapshot_change(self, handler: Callable[[BiometricSnapshot], None]) -> Callable[[], None]:
        return self._subscribe(self._snapshot_handlers, handler)

    def on_state_change(self, handler: Callable[[MentalState], None]) -> Callable[[], None]:
        return self._subscribe(self._state_handlers, handler)

    def handle_intent(self, intent: str, payload: Any = None) -> bool:
        """
        Accept a user intent from the dashboard

        Intents are recorded but do not influence the simulation.

        Returns:
            bool: True if the intent is known
        """
        if intent not in KNOWN_INTENTS:
            logging.warning(f"Ignoring unknown intent: {intent!r}")
            return False
        logging.debug(f"Intent received: {intent} {payload!r}")
        self.last_intent = (intent, payload)
        return True

    def push_snapshot(self, snapshot: BiometricSnapshot) -> bool:
        """
        Replace the current snapshot with an externally produced one

        Used for replays and tests; goes through the same publish and settle
        path as a generation tick. Fields outside their bounds are clamped.
        Ignored while the session is idle.

        Raises:
            ValueError: If a field is not a finite number
        """
        snapshot = clamp_snapshot(self.config, snapshot)
        with self.scheduler.lock:
            if not self.is_running:
                logging.warning("Session is not running - snapshot ignored")
                return False
            self._set_snapshot(snapshot)
            self.scheduler.snapshot_changed()
            return True

    def __enter__(self) -> "BCISession":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    # ------------------------------------------------------------------
    # Scheduler callbacks
    # ------------------------------------------------------------------

    def _on_tick(self) -> None:
        self.n_ticks += 1
        snapshot = self.generator.next(self._snapshot)
        if self.n_ticks % self.config.history_every == 0:
            self.history.append(HistoryPoint.from_snapshot(self._timestamp_label(), snapshot))
        self._set_snapshot(snapshot)

    def _on_settle(self) -> None:
        self.n_classifications += 1
        state = self.classifier.resolve(self._snapshot, self._state)
        if state == self._state:
            return
        logging.info(f"Mental state: {self._state.label} -> {state.label}")
        self._state = state
        self._publish(self._state_handlers, state)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _set_snapshot(self, snapshot: BiometricSnapshot) -> None:
        self._snapshot = snapshot
        self._publish(self._snapshot_handlers, snapshot)

    def _timestamp_label(self) -> str:
        elapsed = self.timeline.now() - (self._t0 or 0.0)
        return (self.config.clock_start + timedelta(seconds=elapsed)).strftime("%H:%M:%S")

    @staticmethod
    def _subscribe(handlers: list, handler: Callable) -> Callable[[], None]:
        handlers.append(handler)

        def unsubscribe() -> None:
            if handler in handlers:
                handlers.remove(handler)

        return unsubscribe

    @staticmethod
    def _publish(handlers: list, value: Any) -> None:
        for handler in list(handlers):
            try:
                handler(value)
            except Exception:
                logging.exception(f"Subscriber {handler!r} failed")
