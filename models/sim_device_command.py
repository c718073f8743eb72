"""
SimDeviceCommand model for simulated device command responses.

Each row maps a command typed against a simulated device to the canned
output the device would print:
- namespace: tenant scope for a group of simulated devices
- device_name: the simulated device inside the namespace
- command: the canonical command text, stored as submitted (trimmed)
- output: what the device answers, may be empty

(namespace, device_name, command) is unique case-insensitively. That rule is
enforced by the dedup resolver at write time, not by a table constraint,
because concurrent writers are allowed to converge on the next write.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import Boolean, Column, DateTime, Index, Integer, String, Text

from models import Base


class SimDeviceCommand(Base):
    """SQLAlchemy model for the sim_device_commands table."""

    __tablename__ = "sim_device_commands"

    id = Column(Integer, primary_key=True, autoincrement=True)
    namespace = Column(String(255), nullable=False)
    device_name = Column(String(255), nullable=False)
    command = Column(Text, nullable=False)
    output = Column(Text, nullable=False, default="")
    enabled = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False, index=True)

    __table_args__ = (
        Index("idx_sim_device_commands_ns_device", "namespace", "device_name"),
    )

    def __repr__(self) -> str:
        return (
            f"<SimDeviceCommand(id={self.id}, namespace={self.namespace}, "
            f"device={self.device_name}, command={self.command!r})>"
        )


class SimDeviceCommandResponse(BaseModel):
    """Pydantic model for API responses"""
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Store-assigned identifier")
    namespace: str = Field(..., description="Namespace the simulated device belongs to")
    device_name: str = Field(..., description="Simulated device name")
    command: str = Field(..., description="Command text as registered")
    output: str = Field(default="", description="Canned output returned on match")
    enabled: bool = Field(default=True, description="Whether the command takes part in enabled-only matching")
    created_at: Optional[datetime] = Field(default=None, description="When the record was created")
    updated_at: Optional[datetime] = Field(default=None, description="When the record was last mutated")


class CreateSimDeviceCommand(BaseModel):
    """Pydantic model for registering a command"""
    namespace: str = Field(default="", description="Namespace of the simulated device")
    device_name: str = Field(default="", description="Simulated device name")
    command: str = Field(default="", description="Command text")
    output: str = Field(default="", description="Canned output")
    enabled: bool = Field(default=False, description="False or omitted means enabled")


class UpdateSimDeviceCommand(BaseModel):
    """Pydantic model for updating a command. Blank strings keep the current value."""
    namespace: str = Field(default="", description="New namespace, blank keeps current")
    device_name: str = Field(default="", description="New device name, blank keeps current")
    command: str = Field(default="", description="New command text, blank keeps current")
    output: str = Field(default="", description="New output, blank keeps current")
    enabled: bool = Field(default=False, description="Always applied as given")
