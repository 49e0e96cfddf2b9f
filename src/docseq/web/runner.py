"""Uvicorn server runner."""

import uvicorn
from uvicorn.config import LOGGING_CONFIG

from docseq.app import App
from docseq.config import Config
from docseq.web.server import create_fastapi_app


def run_server(app: App, config: Config) -> None:
    """Serve the API with uvicorn, keeping its access log in a compact one-line format."""
    fastapi_app = create_fastapi_app(app, config)

    log_config = {**LOGGING_CONFIG, "formatters": {name: dict(fmt) for name, fmt in LOGGING_CONFIG["formatters"].items()}}
    log_config["formatters"]["access"]["fmt"] = '%(asctime)s - %(client_addr)s "%(request_line)s" %(status_code)s'
    log_config["formatters"]["default"]["fmt"] = "%(asctime)s - %(levelname)s - %(message)s"

    uvicorn.run(
        fastapi_app,
        host=config.host,
        port=config.port,
        log_config=log_config,
        log_level="debug" if config.debug else "info",
        access_log=True,
    )
