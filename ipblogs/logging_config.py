import logging


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(app):
    """Attach a console handler to the package logger once per process."""
    root_logger = logging.getLogger("ipblogs")
    root_logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    if not root_logger.handlers:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT))
        root_logger.addHandler(console_handler)

    # Engine echo would leak bound parameters such as password hashes.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    return root_logger
