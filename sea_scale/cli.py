# sea_scale/cli.py
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .config import ConfigBuilder
from .domain.measurements import SessionKind
from .errors import InvalidInputError
from .io import ConsoleReporter, HistoryLogger, ReplayPipeline, append_history, read_recording, write_session_samples
from .measurement import RatioAggregator, SessionCalculator
from .session import ManualSession, TareEstimator


def _add_threshold_arguments(parser: argparse.ArgumentParser) -> None:
    group = parser.add_argument_group("thresholds (defaults from ScaleConfig)")
    group.add_argument("--az-rms", type=float, default=None, help="RMS gate for a_z [m/s^2] (default: 0.35).")
    group.add_argument("--roll-rms", type=float, default=None, help="RMS gate for roll [deg] (default: 2.5).")
    group.add_argument("--pitch-rms", type=float, default=None, help="RMS gate for pitch [deg] (default: 2.5).")
    group.add_argument("--az-instant", type=float, default=None, help="Per-sample gate for |a_z| (default: 0.8).")
    group.add_argument("--roll-instant", type=float, default=None, help="Per-sample gate for |roll| (default: 6.0).")
    group.add_argument("--pitch-instant", type=float, default=None, help="Per-sample gate for |pitch| (default: 6.0).")
    group.add_argument("--alpha", type=float, default=None, help="Gravity filter coefficient (default: 0.92).")
    group.add_argument("--scale-rate", type=float, default=None, help="Scale polling cadence [Hz] (default: 5).")
    group.add_argument("--window", type=float, default=None, help="Live RMS window [s] (default: 5).")
    group.add_argument("--uncertainty-k", type=float, default=None, help="Motion error factor (default: 2.0).")


def build_arg_parser() -> argparse.ArgumentParser:
    """
    CLI parser.

    Responsibility: parsing and option descriptions only, no business logic.
    """
    parser = argparse.ArgumentParser(
        prog="sea-scale",
        description="Motion-aware mass estimation from scale readings and inertial data.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable INFO logging.")
    sub = parser.add_subparsers(dest="command", required=True)

    replay = sub.add_parser("replay", help="Replay a recorded inertial stream as a continuous session.")
    replay.add_argument(
        "--input",
        required=True,
        help="Input TSV with time_ms, ax, ay, az [m/s^2] and optionally scale_g, gx, gy, gz, interval_ms.",
    )
    replay.add_argument("--scale", type=float, default=None,
                        help="Constant scale reading [g] when the recording has no scale_g column.")
    replay.add_argument("--bias", type=float, default=0.0, help="Tare bias subtracted from readings [g].")
    replay.add_argument("--no-motion-correction", action="store_true",
                        help="Do not correct readings for vertical acceleration.")
    replay.add_argument("--decimal", default=".", help="Decimal separator of the input TSV (default: '.').")
    replay.add_argument("--samples-out", default=None, help="Optional TSV path for the collected session samples.")
    replay.add_argument("--history", default=None, help="Optional CSV file the result is appended to.")
    replay.add_argument("--plot", default=None, help="Optional image path for a session plot (needs matplotlib).")
    _add_threshold_arguments(replay)

    manual = sub.add_parser("manual", help="Aggregate manual readings, optionally as a base/final ratio.")
    manual.add_argument("--base", required=True, help="Comma-separated base scale readings [g].")
    manual.add_argument("--final", default=None, help="Comma-separated final scale readings [g].")
    manual.add_argument("--tare", default=None, help="Comma-separated tare readings [g].")
    manual.add_argument("--bias", type=float, default=None, help="User-entered bias [g] (overrides --tare).")
    manual.add_argument("--tare-unc95", type=float, default=0.0,
                        help="User-entered 95%% tare uncertainty [g], used with --bias.")
    manual.add_argument("--trim", type=float, default=0.10, help="Trim fraction per tail (default: 0.10).")
    manual.add_argument("--history", default=None, help="Optional CSV file results are appended to.")
    return parser


def _parse_values(text: str) -> List[str]:
    return [part.strip() for part in text.split(",") if part.strip()]


def _run_replay(args: argparse.Namespace) -> int:
    config = ConfigBuilder.build_scale_config(args)
    recording = read_recording(args.input, decimal=args.decimal)

    pipeline = ReplayPipeline(config)
    pipeline.register_observer(ConsoleReporter(verbose=args.verbose))
    if args.history:
        pipeline.register_observer(HistoryLogger(args.history))

    replay = pipeline.run(
        recording,
        bias=args.bias,
        motion_correction=not args.no_motion_correction,
        scale_reading=args.scale,
    )
    if args.samples_out:
        write_session_samples(replay.session, args.samples_out)
    if args.plot and replay.session.samples:
        from .plotting import plot_session
        fig = plot_session(replay.session, replay.result)
        fig.savefig(args.plot, dpi=150, bbox_inches="tight")
        print(f"Plot saved to {args.plot}")
    return 0


def _run_manual(args: argparse.Namespace) -> int:
    if args.bias is not None:
        tare = TareEstimator.manual_estimate(args.bias, args.tare_unc95)
    else:
        estimator = TareEstimator()
        for value in _parse_values(args.tare or ""):
            estimator.add_tare_sample(value)
        tare = estimator.estimate()
    print(f"Tare: bias={tare.bias_median:.3f} g, T95={tare.tare_uncertainty95:.3f} g ({tare.method.value})")

    calculator = SessionCalculator(trim_fraction=args.trim)
    results = {}
    for kind, text in ((SessionKind.BASE, args.base), (SessionKind.FINAL, args.final)):
        if text is None:
            continue
        session = ManualSession(kind)
        session.start_session(tare.bias_median, tare.tare_uncertainty95)
        for value in _parse_values(text):
            session.add_measurement(value)
        result = calculator.compute(session.stop_session(), kind)
        results[kind] = result
        print(f"{kind.value}: {result.fixed_value:.3f} g +/- {result.error_band95:.3f} g "
              f"(n_trim={result.n_trim}, k95={result.k95:.3f}, confidence={result.confidence:.2f})")
        for note in result.notes:
            print(f"   - {note}")
        if args.history:
            append_history(result, args.history)

    if SessionKind.FINAL in results:
        ratio = RatioAggregator().compute(results[SessionKind.BASE], results[SessionKind.FINAL])
        print(f"change: {ratio.percent:.3f}% +/- {ratio.error_band95_percent:.3f}% (n_eff={ratio.n_eff})")
        for note in ratio.notes:
            print(f"   - {note}")
        if args.history:
            append_history(ratio, args.history)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        if args.command == "replay":
            return _run_replay(args)
        return _run_manual(args)
    except (InvalidInputError, ValueError, FileNotFoundError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
