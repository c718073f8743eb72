from sqlalchemy.orm import declarative_base

Base = declarative_base()

from .sim_device_command import SimDeviceCommand  # noqa: E402

__all__ = ["Base", "SimDeviceCommand"]
