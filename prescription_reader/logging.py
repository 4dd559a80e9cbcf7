import logging
from typing import Optional
from prescription_reader.config import settings
from prescription_reader.utils.logging_filter import RequestIdFilter

def configure_logging(level: Optional[str] = None) -> None:
    lvl = getattr(logging, (level or settings.log_level).upper(), logging.INFO)

    handler = logging.StreamHandler()
    handler.setLevel(lvl)
    handler.addFilter(RequestIdFilter())
    formatter = logging.Formatter(
        "%(asctime)s %(levelname)s %(name)s request_id=%(request_id)s %(message)s"
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(lvl)
    root.handlers = [handler]

    # the SDK's HTTP client is chatty at INFO
    logging.getLogger("httpx").setLevel(max(lvl, logging.WARNING))
