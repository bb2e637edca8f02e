"""
Main entry point for the orbital scene.

Loads settings from the environment, configures logging and runs the
pygame simulator.
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional


def setup_logging(debug: bool = False, log_file: Optional[Path] = None) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=handlers,
    )


async def run_simulator() -> None:
    """Run the desktop simulator."""
    from orbital.config.settings import get_settings
    from orbital.scene.shell import OrbitalScene
    from orbital.simulator.window import SimulatorWindow

    settings = get_settings()
    scene = OrbitalScene(settings, initial_route=settings.start_route)
    window = SimulatorWindow(settings, scene)

    await window.run()


def main() -> None:
    """Main entry point."""
    from dotenv import load_dotenv
    from orbital.config.settings import get_settings

    # Load environment variables
    load_dotenv()

    settings = get_settings()
    setup_logging(settings.debug, settings.log_file)

    logger = logging.getLogger(__name__)
    logger.info("Orbital starting...")

    try:
        asyncio.run(run_simulator())
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("Orbital stopped")


if __name__ == "__main__":
    main()
