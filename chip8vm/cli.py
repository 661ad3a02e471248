"""
Command line entry point.

    chip8vm ROM [--legacy] [--frequency HZ] [--scale N]
    chip8vm ROM --headless --cycles 5000 --screenshot out.png
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import EmulatorConfig
from .constants import DEFAULT_FREQUENCY, DEFAULT_SCALE
from .emulator import Chip8Emulator
from .errors import InstructionError, RomLoadFailure

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='chip8vm', description='CHIP-8 interpreter')
    parser.add_argument('path', help='path to the rom file')
    parser.add_argument('-l', '--legacy', action='store_true',
                        help='run with old instructions on (original COSMAC VIP quirks)')
    parser.add_argument('-f', '--frequency', type=float, default=DEFAULT_FREQUENCY,
                        help='instruction clock frequency in Hz (default: %(default)s)')
    parser.add_argument('-s', '--scale', type=int, default=DEFAULT_SCALE,
                        help='window pixels per CHIP-8 pixel (default: %(default)s)')
    parser.add_argument('--headless', action='store_true',
                        help='run without a window and print the final screen')
    parser.add_argument('--cycles', type=int, default=5000,
                        help='cycles to run in headless mode (default: %(default)s)')
    parser.add_argument('--screenshot', type=str,
                        help='save the final screen as PNG to this path')
    parser.add_argument('--seed', type=int, help='seed for the random number opcode')
    parser.add_argument('-v', '--verbose', action='store_true', help='debug logging')
    parser.add_argument('--debug-file', type=str,
                        help='write the instruction trace to this log file')
    return parser


def setup_logging(verbose: bool = False, debug_file: Optional[str] = None):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    if debug_file:
        handler = logging.FileHandler(debug_file, mode='w', encoding='utf-8')
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter('%(message)s'))
        root = logging.getLogger()
        root.addHandler(handler)
        root.setLevel(logging.DEBUG)
        logger.info("Debug output will be written to: %s", debug_file)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose, args.debug_file)

    try:
        config = EmulatorConfig(old_instructions=args.legacy, frequency=args.frequency,
                                scale=args.scale, seed=args.seed)
    except ValueError as e:
        parser.error(str(e))

    emulator = Chip8Emulator(config)
    try:
        emulator.load_rom(args.path)
    except RomLoadFailure as e:
        logger.error("%s", e)
        return 1

    # The window only opens once the ROM is in memory
    if not args.headless:
        from .tk_screen import TkScreen
        emulator.screen = TkScreen(scale=config.scale, title=f"chip-8: {args.path}")

    try:
        if args.headless:
            cycles = emulator.run(max_cycles=args.cycles, timer_every=config.cycles_per_timer_tick)
            logger.info("Execution completed: %d cycles", cycles)
            print(emulator.screen.debug_str(), end='')
        else:
            from . import driver
            driver.run(emulator)
    except InstructionError as e:
        logger.error("%s", e)
        return 1
    finally:
        if args.screenshot:
            emulator.screen.save_png(args.screenshot, scale=config.scale)
        emulator.screen.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
