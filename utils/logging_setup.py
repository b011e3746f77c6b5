"""
Logging setup for the Tabulario command line.

The library modules only create loggers; handlers are installed here, once,
by the entry point.
"""
import copy
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional


class ColourFormatter(logging.Formatter):
    """
    Formatter that colours the level name for terminal output.
    """

    # ANSI colour codes
    COLOURS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
        'RESET': '\033[0m',
    }

    def format(self, record):
        # Other handlers see the same record; colour a copy
        record = copy.copy(record)
        levelname = record.levelname
        if levelname in self.COLOURS:
            record.levelname = f"{self.COLOURS[levelname]}{levelname:<8}{self.COLOURS['RESET']}"
        return super().format(record)


def setup_logging(
    log_level: str = 'INFO',
    log_dir: Optional[str] = None,
    component: str = 'tabulario'
) -> logging.Logger:
    """
    Configure the root logger.

    Console output goes to stderr so progress lines on stdout stay readable.
    When log_dir is given, a DEBUG-level file log is written there as well.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_dir: Directory for log files (None = console only)
        component: Component name for log filename

    Returns:
        Root logger
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG if log_dir else level)
    logger.handlers = []

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(ColourFormatter(
        '[%(asctime)s] %(levelname)s | %(name)-12s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    logger.addHandler(console_handler)

    log_file = None
    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        log_file = log_path / f'{component}_{timestamp}.log'

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            '[%(asctime)s] %(levelname)-8s | %(name)-12s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        logger.addHandler(file_handler)

    logger.debug(f"Logging initialised (level: {log_level}, file: {log_file})")

    return logger
