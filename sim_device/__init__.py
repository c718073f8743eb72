"""
HTTP API for simulated device commands.
"""

from sim_device.api import create_sim_device_app
from sim_device.extension import register_extra_routes

__all__ = ["create_sim_device_app", "register_extra_routes"]
