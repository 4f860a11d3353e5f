import argparse
import logging
import sys
from pathlib import Path
import os
os.environ['PYGAME_HIDE_SUPPORT_PROMPT'] = "hide"

# Ensure repo root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from startlights.app.loader import config_from_settings, load_settings
from startlights.app.loop import run_trainer


def main():
    parser = argparse.ArgumentParser(description="Start lights reaction trainer")
    parser.add_argument("--config", type=Path, help="Settings yaml (TrainerConfig field names)")
    parser.add_argument("--screen", help="Screen size WxH, e.g. 1280x720")
    parser.add_argument("--fps", type=int, help="Frame rate of the host loop")
    parser.add_argument("--buffer-ms", type=float, help="Latency buffer added after calibration")
    parser.add_argument("--trials", type=int, help="Calibration trials (>= 10)")
    parser.add_argument("--seed", type=int, help="Seed for the lights-out delay")
    parser.add_argument("--data-dir", type=Path, help="Where the best time is stored")
    parser.add_argument("--key", action="append", dest="keys", help="Reaction key name (repeatable), default space")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = load_settings(args.config) if args.config else {}
    screen_size = tuple(map(int, args.screen.lower().split("x"))) if args.screen else None

    cfg = config_from_settings(
        settings,
        screen_size=screen_size,
        fps=args.fps,
        latency_buffer_ms=args.buffer_ms,
        calibration_trials=args.trials,
        seed=args.seed,
        data_dir=args.data_dir,
        reaction_keys=tuple(args.keys) if args.keys else None,
    )
    run_trainer(cfg)


if __name__ == "__main__":
    main()
