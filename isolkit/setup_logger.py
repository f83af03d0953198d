import logging


def setup_basic_logger(level: int = logging.INFO):
    """
    Sets up a basic root logger that prints to the console.

    Library modules log through ``logging.getLogger(__name__)``; call this
    once from a script to see their output.
    """
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # Loggers of the package all live below "isolkit"
    logger = logging.getLogger("isolkit")
    logger.setLevel(level)
    return logger
