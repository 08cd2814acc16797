import logging
import sys
from logging import StreamHandler
from typing import Optional

from mlfq.config import Config


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=getattr(logging, (level or Config.get_log_level()).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s]: %(message)s",
        handlers=[StreamHandler(sys.stdout)],
    )
