"""
Logging setup.

Modules log through ``logging.getLogger(__name__)``. Audit failures that must
not interrupt the primary mutation are reported on the dedicated
``accounthub.audit`` channel.
"""

import logging

from accounthub.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Dedicated audit channel logger
audit_logger = logging.getLogger("accounthub.audit")
if not audit_logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    audit_logger.addHandler(handler)
    audit_logger.setLevel(logging.INFO)
    # written once, by the handler above
    audit_logger.propagate = False


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(level=(level or settings.LOG_LEVEL).upper(), format=LOG_FORMAT)
