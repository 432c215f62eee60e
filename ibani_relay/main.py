import argparse
import logging
import sys

import uvicorn

from ibani_relay.api_server import create_app
from ibani_relay.config import RelaySettings, load_settings
from ibani_relay.errors import ConfigurationError

logger = logging.getLogger("IbaniRelay.Main")


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s [%(levelname)s] %(name)s - %(message)s',
    )


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Ibani Translator relay server")
    parser.add_argument("--host", type=str, required=False, default=None)
    parser.add_argument("--port", type=int, required=False, default=None)
    parser.add_argument("--env-file", type=str, required=False, default=None)
    return parser.parse_args(argv)


def print_banner(settings: RelaySettings):
    logger.info("=========================================")
    logger.info("🚀 Ibani Translator Backend is running!")
    logger.info(f"📡 Port: {settings.port}")
    logger.info(f"🤖 Model: {settings.model_id}")
    logger.info(f"🔌 Backend: {settings.backend}")
    logger.info(f"🔗 Health Check: http://localhost:{settings.port}/health")
    logger.info("=========================================")


def build_app():
    """uvicorn --factory entry point (environment only, no CLI flags)."""
    settings = load_settings()
    configure_logging(settings.log_level)
    return create_app(settings)


def main(argv=None):
    args = parse_args(argv)

    try:
        settings = load_settings(args.env_file, host=args.host, port=args.port)
    except ConfigurationError as e:
        configure_logging()
        logger.error(f"Invalid configuration: {e.message}")
        sys.exit(1)

    configure_logging(settings.log_level)
    app = create_app(settings)
    print_banner(settings)

    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
