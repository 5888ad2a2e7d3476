"""Species Atlas web application entry point (``uvicorn speciesatlas.web.main:app``)."""

import logging

from speciesatlas.config import ConfigManager
from speciesatlas.system.structlog_configurator import configure_structlog
from speciesatlas.web.core.factory import create_app

# Configure logging before anything else imports and creates loggers
config = ConfigManager().load()
configure_structlog(config)

# Our own middleware logs requests
logging.getLogger("uvicorn.access").disabled = True
logging.getLogger("uvicorn.error").setLevel(logging.INFO)

app = create_app()
