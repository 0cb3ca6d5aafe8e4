"""
Logging setup for the maze game.

The modules are flat (maze, maze_engine, joystick, main), so there is no
package logger to hang handlers on; they all propagate to the root logger,
which is configured here once at app start. Maze generation attempts log at
DEBUG, session starts and the win at INFO, generation exhaustion at WARNING.
"""
import logging
import sys
from typing import Optional


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Route the game's log records to stdout and, optionally, a file.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to a file.
    """
    logger = logging.getLogger()
    logger.setLevel(level)

    # A second call (e.g. a page reload in the web build) must not double up
    if logger.hasHandlers():
        logger.handlers.clear()

    # Console Handler (stdout)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    # Format: Time - Module - Level - Message
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info("Logging initialized.")
