import logging
import os
import sys

from loguru import logger

# stdlib loggers that would otherwise echo every proxied request
NOISY_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


def setup_logger(*, json_logs: bool = False, level: str = "INFO", log_dir: str | None = "logs") -> None:
    """Configure loguru for the explorer service.

    Console level comes from LOG_LEVEL (falls back to ``level``). When ``log_dir``
    is set, a DEBUG file sink keeps the full proxy trail (upstream URLs, statuses).
    """
    console_level = os.getenv("LOG_LEVEL", level).upper()
    logger.remove()

    if json_logs:
        logger.add(sys.stdout, serialize=True, level=console_level)
    else:
        logger.add(
            sys.stdout,
            format=(
                "<green>{time:HH:mm:ss}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan> - "
                "<level>{message}</level>"
            ),
            level=console_level,
            colorize=True,
        )

    if log_dir:
        logger.add(
            os.path.join(log_dir, "explorer_{time:YYYY-MM-DD}.log"),
            rotation="20 MB",
            retention="7 days",
            compression="gz",
            level="DEBUG",
            serialize=json_logs,
        )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
