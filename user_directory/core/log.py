import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "info") -> None:
    """Configure root logging once for the process (uvicorn keeps its own handlers)."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # botocore is chatty at DEBUG
    logging.getLogger("botocore").setLevel(logging.WARNING)
