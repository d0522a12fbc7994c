#main.py

"""
SimMenu - Simulator Device Menu
"""
import argparse
import asyncio
import logging
import signal
import sys
from pathlib import Path

from simmenu.utils.config import load_config
from simmenu.utils.logger import setup_logging
from simmenu.menu.view import View, render_lines
from simmenu.watchdog.monitor import MenuManager

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Keep a simulator device menu in sync with disk")
    parser.add_argument("--config", help="Path to a YAML or JSON config file")
    parser.add_argument("--root", help="Device root directory to watch")
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, ...)")
    parser.add_argument("--polling", action="store_true", help="Use the polling observer")
    return parser.parse_args(argv)


def print_menu(view: View):
    """Console presenter"""
    logger.info("Menu:\n%s", "\n".join(render_lines(view)))


async def main(argv=None):
    """Main entry point"""
    args = parse_args(argv)

    config = load_config(args.config)
    if args.root:
        config.paths.device_root = Path(args.root).expanduser()
    if args.log_level:
        config.log_level = args.log_level
    if args.polling:
        config.watchdog.use_polling = True

    setup_logging(config.log_level, config.log_file, config.log_format)

    loop = asyncio.get_running_loop()
    stop_event = asyncio.Event()
    if sys.platform != 'win32':
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, stop_event.set)

    manager = MenuManager(config, loop=loop)
    print_menu(manager.view)
    manager.subscribe(print_menu)

    print(f"Watching: {config.paths.device_root}")
    print("SimMenu is running. Press Ctrl+C to stop.")

    manager.start()
    try:
        await stop_event.wait()
    except asyncio.CancelledError:
        pass
    finally:
        manager.stop()
        logger.info("Shut down")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\nShutting down...")
