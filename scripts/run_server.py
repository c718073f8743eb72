#!/usr/bin/env python3
"""
Entry point for the simulated device command API.

Usage:
    python scripts/run_server.py

Environment variables:
    SIM_DEVICE_DATABASE_URL: SQLAlchemy URL of the command store
    CONFIG_PATH: JSON config with server_host, server_port, log_level,
                 store_retry_attempts, store_retry_delay_ms
"""

import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv

load_dotenv()

import logging

import uvicorn

from db import init_db
from sim_device.api import create_sim_device_app
from utils.config_service import Config
from utils.logging_setup import configure_logging

logger = logging.getLogger("sim_device.server")


def run_server() -> None:
    configure_logging(Config.get_str("log_level", os.getenv("LOG_LEVEL", "INFO")) or "INFO")

    host = Config.get_str("server_host", os.getenv("SIM_DEVICE_HOST", "0.0.0.0")) or "0.0.0.0"
    port = Config.get_int("server_port", int(os.getenv("SIM_DEVICE_PORT", "8080")))

    init_db()
    app = create_sim_device_app()

    logger.info("Starting simulated device API on %s:%s", host, port)
    uvicorn.run(app, host=host, port=port, log_level="warning")


if __name__ == "__main__":
    run_server()
