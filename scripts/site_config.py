"""Settings shared by the scraper and the page builder."""

import logging

SCHOLAR_ID = "buYGhlYAAAAJ"
SCHOLAR_URL = "https://scholar.google.com/citations"

LOG_LEVEL = logging.INFO
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def profile_url(scholar_id: str) -> str:
    return f"{SCHOLAR_URL}?user={scholar_id}&hl=en"


def configure_logging() -> None:
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
