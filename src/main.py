import logging
import signal

from config.config import SETTINGS, validate_settings
from di.container import Container
from utils.logging import setup_logging

logger = logging.getLogger(__name__)


def main():
    setup_logging(SETTINGS.log_level)
    validate_settings(SETTINGS)
    container = Container()
    container.init_resources()
    server = container.server()

    def _handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, shutting down server")
        server.stop()

    signal.signal(signal.SIGINT, _handle_signal)
    signal.signal(signal.SIGTERM, _handle_signal)

    try:
        server.start()
        server.block_until_shutdown()
    finally:
        server.stop()
        container.shutdown_resources()
        logger.info("Server shut down")


if __name__ == "__main__":
    main()
