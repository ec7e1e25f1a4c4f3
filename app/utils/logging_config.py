import logging
import sys

# HTTP clients under supabase and the Sheets client log every request at INFO.
NOISY_LOGGERS = ("httpx", "httpcore", "hpack")


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """
    Sets up the shared incident_tickets logger with a single stdout handler.
    """
    logger = logging.getLogger("incident_tickets")
    if logger.handlers:
        return logger
    logger.setLevel(level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    logger.addHandler(console_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return logger


logger = setup_logging()
