"""Application entry point for the document number allocator server."""

from docseq.app import App
from docseq.config import Config
from docseq.logging import setup_logging
from docseq.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
