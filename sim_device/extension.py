"""
Hook for mounting additional routes on the simulated device API.

An add-on module registers a single callable during initialisation, before
the app is built. create_sim_device_app() calls it once the base routes are
in place.
"""

import logging
from typing import Callable, Optional

from fastapi import FastAPI

logger = logging.getLogger(__name__)

ExtraRoutesFunc = Callable[[FastAPI], None]

_extra_routes: Optional[ExtraRoutesFunc] = None


def register_extra_routes(func: ExtraRoutesFunc) -> None:
    """Register the callable that mounts extra routes. Replaces any previous one."""
    global _extra_routes
    _extra_routes = func


def clear_extra_routes() -> None:
    global _extra_routes
    _extra_routes = None


def apply_extra_routes(app: FastAPI) -> bool:
    """
    Mount the registered extra routes on an app.

    Returns:
        True if a callable was registered and applied
    """
    if _extra_routes is None:
        return False
    _extra_routes(app)
    logger.info("Extra routes mounted")
    return True
