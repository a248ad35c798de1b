"""Command-line interface for livecheck: ``livecheck info`` and ``livecheck replay``."""

import argparse
import logging
import sys

logger = logging.getLogger(__name__)

EXIT_VERIFIED = 0
EXIT_NOT_VERIFIED = 1
EXIT_BAD_INPUT = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="livecheck",
        description="Gesture-sequence liveness check",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  livecheck info                                  # Gestures and geometry
  livecheck replay session.jsonl                  # Replay a recorded trace
  livecheck replay session.jsonl --order blink,smile
""",
    )
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("info", help="Show gesture thresholds and preview geometry")

    replay_p = sub.add_parser("replay", help="Replay a recorded detector trace (JSONL)")
    replay_p.add_argument("trace", help="Path to trace file")
    replay_p.add_argument(
        "--order",
        type=str,
        default=None,
        help="Comma-separated gesture order (default: blink,turn_head_left,turn_head_right,nod,smile)",
    )
    replay_p.add_argument(
        "--window-width",
        type=float,
        default=None,
        help="Screen width used to center the preview (default: 375)",
    )
    replay_p.add_argument(
        "--no-throttle",
        action="store_true",
        help="Process every frame regardless of the minimum detection interval",
    )
    replay_p.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    return parser


def _parse_order(order_str):
    from livecheck.types import GestureKind

    order = [GestureKind.from_name(name) for name in order_str.split(",") if name.strip()]
    if not order:
        raise ValueError(f"--order {order_str!r} names no gestures")
    return order


def _cmd_info(args: argparse.Namespace) -> int:
    from livecheck.config import DEFAULT_GESTURE_ORDER, GESTURES, LivenessConfig
    from livecheck.geometry import preview_rect

    config = LivenessConfig()
    rect = preview_rect(config)
    print("Gestures:")
    for gesture, spec in GESTURES.items():
        marker = "*" if gesture in DEFAULT_GESTURE_ORDER else " "
        print(f"  {marker} {gesture.name:16s} {spec.threshold:>7.2f}  {spec.instruction}")
    print()
    print("Preview:")
    print(f"  rect          x={rect.min_x:.1f} y={rect.min_y:.1f} size={rect.width:.0f}")
    print(f"  edge offset   {config.edge_offset:.0f}")
    print(f"  face max      {config.face_max_size:.0f}")
    print(f"  min interval  {config.min_detection_interval_ms:.0f} ms")
    return 0


def _cmd_replay(args: argparse.Namespace) -> int:
    from dataclasses import replace

    from livecheck.config import LivenessConfig
    from livecheck.session import LivenessSession, VerificationContext
    from livecheck.trace import load_trace

    try:
        order = _parse_order(args.order) if args.order is not None else None
        frames = load_trace(args.trace)
    except (FileNotFoundError, ValueError) as e:
        logger.error("%s", e)
        return EXIT_BAD_INPUT

    config = LivenessConfig()
    if args.window_width is not None:
        config = replace(config, window_width=args.window_width)

    context = VerificationContext()
    session = LivenessSession(
        context=context,
        gesture_order=order,
        config=config,
        # Offline replay has no UI to wait for
        scheduler=lambda delay, callback: callback(),
        throttle=not args.no_throttle,
    )

    for i, frame in enumerate(frames):
        state = session.on_faces_detected(frame.faces, timestamp_ms=frame.t_ms)
        prompt = session.prompt()
        print(
            f"[{i:4d}] faces={len(frame.faces)} step={state.current_index}/{len(state.gesture_order)} "
            f"progress={state.progress_fill:6.2f}%  {prompt.action or prompt.headline}"
        )
        if state.complete:
            break

    print()
    print(
        f"frames: {session.frames_seen} processed, {session.frames_dropped} dropped "
        f"of {len(frames)}"
    )
    if context.verified:
        print("Result: VERIFIED")
        return EXIT_VERIFIED
    print("Result: NOT VERIFIED")
    return EXIT_NOT_VERIFIED


def main(argv=None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if getattr(args, "verbose", False):
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.WARNING)

    if args.command == "info":
        sys.exit(_cmd_info(args))
    elif args.command == "replay":
        sys.exit(_cmd_replay(args))
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
