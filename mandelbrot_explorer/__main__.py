"""
Command-line entry point: python -m mandelbrot_explorer
"""

import logging
import sys
from argparse import ArgumentParser

from .app import run
from .config import ANCHOR_MODES, ConfigError, config_from_settings, load_settings


def build_parser():
    parser = ArgumentParser(prog='mandelbrot-explorer',
                            description='Interactive Mandelbrot set explorer.')

    parser.add_argument('--settings', type=str, dest='settings',
                        help='JSON file with startup settings', metavar='PATH')

    parser.add_argument('--width', type=int, dest='canvas_width',
                        help='canvas width in pixels (default 800)', metavar='WIDTH')

    parser.add_argument('--height', type=int, dest='canvas_height',
                        help='canvas height in pixels (default 600)', metavar='HEIGHT')

    parser.add_argument('--max-iter', type=int, dest='initial_max_iterations',
                        help='initial iteration budget (default 500)', metavar='MAX_ITER')

    parser.add_argument('--iteration-step', type=int, dest='iteration_step',
                        help='budget change per Up/Down key press, also the minimum budget (default 100)',
                        metavar='STEP')

    parser.add_argument('--zoom-speed', type=float, dest='zoom_speed',
                        help='each wheel notch scales the view by 1 + ZOOM_SPEED (default 0.1)',
                        metavar='ZOOM_SPEED')

    parser.add_argument('--anchor-mode', choices=ANCHOR_MODES, dest='anchor_mode',
                        help='how zooming recenters around the pointer (default exact)')

    parser.add_argument('--correct-aspect', action='store_const', const=True,
                        dest='correct_aspect',
                        help='scale the vertical span by height/width to avoid stretching')

    parser.add_argument('--parallel', action='store_const', const=True, dest='parallel',
                        help='render frame rows on multiple threads')

    parser.add_argument('--fps', type=int, dest='frame_rate_cap',
                        help='frame rate cap, 0 for none (default 60)', metavar='FPS')

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='enable debug logging')

    return parser


def config_from_args(args):
    """Defaults, then the settings file, then command-line flags."""
    settings = load_settings(args.settings) if args.settings else {}
    config = config_from_settings(settings)
    return config.with_overrides(
        canvas_width=args.canvas_width,
        canvas_height=args.canvas_height,
        initial_max_iterations=args.initial_max_iterations,
        iteration_step=args.iteration_step,
        zoom_speed=args.zoom_speed,
        anchor_mode=args.anchor_mode,
        correct_aspect=args.correct_aspect,
        parallel=args.parallel,
        frame_rate_cap=args.frame_rate_cap,
    ).validate()


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    try:
        config = config_from_args(args)
    except ConfigError as e:
        logging.getLogger(__name__).error("Invalid configuration: %s", e)
        return 2

    run(config)
    return 0


if __name__ == "__main__":
    sys.exit(main())
