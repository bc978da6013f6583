"""
API server entry point.

Loads .env, reads Settings from the environment, configures logging and
serves the app with uvicorn on HOST:PORT.
"""

import sys

import uvicorn
from dotenv import load_dotenv

from diff_voyager.api import create_app
from diff_voyager.infra.logging_config import setup_logging
from diff_voyager.infra.settings import Settings


def main() -> int:
    load_dotenv()

    settings = Settings.from_env()
    setup_logging(log_level=settings.log_level, log_dir=settings.log_dir)

    app = create_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
