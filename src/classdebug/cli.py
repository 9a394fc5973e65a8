"""
Command-line entry point for classdebug.

Parses the options, configures logging and hands the inspection over to a
dedicated worker thread. The interpreter exits once the report is done.

Usage:
    classdebug [--file PATH] [--target FIELDS|METHODS|CONSTRUCTORS] [--class NAME]

Examples:
    classdebug --class collections.OrderedDict --target METHODS
    classdebug --file plugins/shapes.py --class shapes.Circle --target CONSTRUCTORS
    classdebug --file dist/shapes-1.0-py3-none-any.whl --class shapes.circle.Circle
"""

import threading
from typing import Optional, Sequence

from classdebug.config.debug_config import parse_config
from classdebug.inspector.inspector import Inspector
from classdebug.utils.logger import get_logger, get_report_logger

WORKER_NAME = "classdebug-inspector"


def main(argv: Optional[Sequence[str]] = None) -> threading.Thread:
    """
    Parse CLI arguments and start the inspector on its own thread.

    Args:
        argv (Sequence[str], optional): Arguments without the program name.

    Returns:
        threading.Thread: The started (non-daemon) worker.
    """
    config = parse_config(argv)

    logger = get_logger("classdebug", level=config.log_level, log_file=config.log_file)
    report = get_report_logger(level=config.log_level, log_file=config.log_file)
    logger.debug(f"Parsed options: {config.model_dump(by_alias=True)}")

    inspector = Inspector(config, report_logger=report)
    worker = threading.Thread(target=inspector.run, name=WORKER_NAME)
    worker.start()
    return worker


if __name__ == "__main__":
    main()
