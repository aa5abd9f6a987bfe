"""
Main CLI entry point for NeuroLink Sim

This module provides the command-line interface and the main run loop
for the simulated BCI dashboard.
"""

import argparse
import logging
import signal
import sys
from threading import Event
from typing import List, Optional

from ..core.config import *
from ..core.exceptions import ConfigurationError
from ..detection.state_classifier import StateClassifier
from ..engine.session import BCISession
from ..engine.timeline import RealTimeline, VirtualTimeline
from ..presentation.charts import save_trend_chart
from ..presentation.dashboard import ConsoleDashboard


def build_config(args: argparse.Namespace) -> SimulationConfig:
    """Build a SimulationConfig from parsed arguments"""
    config = SimulationConfig(
        tick_interval=args.tick_interval,
        settle_delay=args.settle_delay,
        history_capacity=args.capacity,
        history_every=args.history_every,
        seed_history=not args.no_seed_history,
        seed=args.seed,
        stress_threshold=args.stress_threshold,
        fatigue_threshold=args.fatigue_threshold,
        focus_high_threshold=args.focus_high,
        focus_low_threshold=args.focus_low,
    )
    validate_config(config)
    return config


def run_session(session: BCISession, dashboard: ConsoleDashboard,
                duration: Optional[float], fast: bool,
                shutdown_event: Optional[Event] = None) -> None:
    """
    Main simulation loop

    With ``fast`` the session runs on a virtual timeline and ``duration``
    simulated seconds pass instantly; otherwise it runs in wall-clock time
    until the duration elapses or a shutdown signal arrives.
    """
    shutdown_event = shutdown_event or Event()

    session.start()
    try:
        if fast:
            session.timeline.advance(duration)
        else:
            logging.info("Simulation running. Press Ctrl+C to stop.")
            shutdown_event.wait(timeout=duration)
    finally:
        session.stop()

    logging.info(f"Session finished after {session.n_ticks} ticks, "
                 f"{session.n_classifications} classifications")
    dashboard.show()


def classify_once(args: argparse.Namespace, config: SimulationConfig) -> int:
    """Classify a single hand-entered snapshot"""
    snapshot = config.initial_snapshot.evolve(
        stress=args.stress, focus=args.focus, fatigue=args.fatigue)
    state = StateClassifier.from_config(config).classify(snapshot)
    if state is None:
        print("No rule matched - previous state would be kept")
    else:
        print(f"{state.label}: {state.message}")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create command line argument parser"""
    parser = argparse.ArgumentParser(
        description="NeuroLink Sim - Simulated BCI dashboard",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run a live session for one minute
  neurolink --run --duration 60

  # Replay ten simulated minutes instantly and save the trend chart
  neurolink --run --fast --duration 600 --seed 7 --chart trends.png

  # Check which state a reading maps to
  neurolink --classify --stress 30 --fatigue 20 --focus 85
        """
    )

    # Mode selection (mutually exclusive)
    mode_group = parser.add_mutually_exclusive_group(required=True)
    mode_group.add_argument("--run", action="store_true",
                            help="Run the simulated session")
    mode_group.add_argument("--classify", action="store_true",
                            help="Classify a single snapshot and exit")

    # Run options
    parser.add_argument("--duration", type=float, default=None,
                        help="Seconds to run (default: until Ctrl+C; required with --fast)")
    parser.add_argument("--fast", action="store_true",
                        help="Run on a virtual clock instead of wall-clock time")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for a reproducible session")
    parser.add_argument("--chart",
                        help="Save the trend chart to this image file when the session ends")

    # Timing and history
    parser.add_argument("--tick-interval", type=float, default=TICK_INTERVAL_SEC,
                        help=f"Seconds between snapshots (default: {TICK_INTERVAL_SEC})")
    parser.add_argument("--settle-delay", type=float, default=SETTLE_DELAY_SEC,
                        help=f"Quiet period before classifying (default: {SETTLE_DELAY_SEC})")
    parser.add_argument("--capacity", type=int, default=HISTORY_CAPACITY,
                        help=f"Trend chart points kept (default: {HISTORY_CAPACITY})")
    parser.add_argument("--history-every", type=int, default=HISTORY_EVERY_N_TICKS,
                        help=f"Ticks per chart point (default: {HISTORY_EVERY_N_TICKS})")
    parser.add_argument("--no-seed-history", action="store_true",
                        help="Start with an empty trend chart")

    # Classifier thresholds
    parser.add_argument("--stress-threshold", type=float, default=STRESS_THRESHOLD,
                        help=f"Stress above this is 'stressed' (default: {STRESS_THRESHOLD})")
    parser.add_argument("--fatigue-threshold", type=float, default=FATIGUE_THRESHOLD,
                        help=f"Fatigue above this is 'tired' (default: {FATIGUE_THRESHOLD})")
    parser.add_argument("--focus-high", type=float, default=FOCUS_HIGH_THRESHOLD,
                        help=f"Focus above this is 'focused' (default: {FOCUS_HIGH_THRESHOLD})")
    parser.add_argument("--focus-low", type=float, default=FOCUS_LOW_THRESHOLD,
                        help=f"Focus below this is 'distracted' (default: {FOCUS_LOW_THRESHOLD})")

    # Snapshot for --classify
    parser.add_argument("--stress", type=float, default=INITIAL_SNAPSHOT.stress)
    parser.add_argument("--focus", type=float, default=INITIAL_SNAPSHOT.focus)
    parser.add_argument("--fatigue", type=float, default=INITIAL_SNAPSHOT.fatigue)

    # Logging
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable verbose logging")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)

    # Setup logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    if args.fast and args.duration is None:
        parser.error("--fast requires --duration")

    try:
        config = build_config(args)
    except ConfigurationError as e:
        logging.error(f"Invalid configuration: {e}")
        return 1

    if args.classify:
        return classify_once(args, config)

    print("=" * 60)
    print("NeuroLink Sim - Simulated BCI Session")
    print("=" * 60)

    timeline = VirtualTimeline() if args.fast else RealTimeline()
    session = BCISession(config, timeline=timeline)
    dashboard = ConsoleDashboard(session)

    # Graceful shutdown handler
    shutdown_event = Event()
    if not args.fast:
        def signal_handler(signum, frame):
            logging.info("Shutdown signal received")
            shutdown_event.set()

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

    try:
        run_session(session, dashboard, args.duration, args.fast, shutdown_event)
        if args.chart:
            if session.get_history():
                save_trend_chart(session.get_history(), args.chart)
            else:
                logging.warning("No history recorded - chart not saved")
        return 0
    except KeyboardInterrupt:
        logging.info("Interrupted by user")
        return 0
    finally:
        session.stop()
        dashboard.close()


if __name__ == "__main__":
    sys.exit(main())
