"""Flask application factory for the rename relay."""

from __future__ import annotations

import time
from typing import Callable

from flask import Flask

from fname_swap.config import RenamerConfig
from fname_swap.features.directory.service import DirectoryClient
from fname_swap.features.relay.api import RELAY_EXTENSION_KEY, rename_api_bp
from fname_swap.features.relay.service import RelayService
from fname_swap.shared.logging import setup_logging


def create_app(
    config: RenamerConfig | None = None,
    directory: DirectoryClient | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> Flask:
    config = config or RenamerConfig.from_environment()
    setup_logging()

    app = Flask(__name__)
    app.config["FNAME_SWAP"] = config

    if directory is None:
        directory = DirectoryClient(
            config.directory_url,
            timeout_config=config.timeout_config,
            read_retry_config=config.read_retry_config,
        )
    app.extensions[RELAY_EXTENSION_KEY] = RelayService(
        directory, delay=config.relay_delay, sleep=sleep
    )
    app.register_blueprint(rename_api_bp)
    return app
