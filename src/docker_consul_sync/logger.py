import logging

logging.getLogger("urllib3").setLevel(logging.WARNING)
logging.getLogger("docker").setLevel(logging.WARNING)

logger = logging.getLogger("docker_consul_sync")


def setup_logger(level: str = "ERROR") -> logging.Logger:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    logger.setLevel(level.upper())

    return logger
