"""
FastAPI application for simulated device commands.

Clients register canned command outputs per namespace and device, then
submit typed commands to /match and get back what the device would print.
"""

from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from exceptions.sim_device_command_errors import (
    CommandNotFoundError,
    CommandValidationError,
    SimDeviceCommandError,
)
from models.sim_device_command import CreateSimDeviceCommand, UpdateSimDeviceCommand
from services.sim_device_command_service import SimDeviceCommandService
from sim_device.extension import apply_extra_routes
from sim_device.models import ApiEnvelope, MatchResponse, MatchSimDeviceCommand


API_VERSION = "1.0.0"
BASE_PATH = "/api/v1/sim-device-cmds"


def _envelope(status_code: int, code: str, message: str, data: Any = None) -> JSONResponse:
    body: dict = {"code": code, "message": message}
    if data is not None:
        body["data"] = data
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def _status_for(error: SimDeviceCommandError) -> int:
    if isinstance(error, CommandValidationError):
        return 400
    if isinstance(error, CommandNotFoundError):
        return 404
    return 500


def _parse_id(raw: str) -> int:
    """Non-numeric ids become 0, which the service rejects as INVALID_ID."""
    try:
        return int(raw)
    except ValueError:
        return 0


def _parse_enabled(raw: Optional[str]) -> Optional[bool]:
    value = (raw or "").strip()
    if value == "true":
        return True
    if value == "false":
        return False
    return None


def create_sim_device_app(service: Optional[SimDeviceCommandService] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Registry service to use; a default one bound to SessionLocal
                 is created when omitted

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title="Simulated Device Commands",
        description="Canned command responses for namespace-scoped virtual devices",
        version=API_VERSION,
    )
    registry = service or SimDeviceCommandService()

    @app.exception_handler(RequestValidationError)
    async def invalid_params(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _envelope(400, "INVALID_PARAMS", f"Invalid parameters: {exc.errors()}")

    @app.exception_handler(SimDeviceCommandError)
    async def command_error(request: Request, exc: SimDeviceCommandError) -> JSONResponse:
        return _envelope(_status_for(exc), exc.code, exc.message)

    @app.get("/api/v1/health", response_model=ApiEnvelope)
    def health() -> JSONResponse:
        return _envelope(200, "SUCCESS", "ok")

    @app.post(BASE_PATH, response_model=ApiEnvelope)
    def create_command(request: CreateSimDeviceCommand) -> JSONResponse:
        """Register a command; an existing record for the same key is refreshed."""
        record, created = registry.create_command(
            namespace=request.namespace,
            device_name=request.device_name,
            command=request.command,
            output=request.output,
            enabled=request.enabled,
        )
        if created:
            return _envelope(201, "SUCCESS", "Created", record)
        return _envelope(200, "SUCCESS", "Updated existing record", record)

    @app.get(BASE_PATH, response_model=ApiEnvelope)
    def list_commands(
        namespace: Optional[str] = None,
        device_name: Optional[str] = None,
        enabled: Optional[str] = None,
    ) -> JSONResponse:
        """List commands, most recently updated first."""
        records = registry.list_commands(
            namespace=namespace,
            device_name=device_name,
            enabled=_parse_enabled(enabled),
        )
        return _envelope(200, "SUCCESS", "OK", records)

    @app.post(f"{BASE_PATH}/match", response_model=ApiEnvelope)
    def match_command(request: MatchSimDeviceCommand) -> JSONResponse:
        """Resolve a typed command to the simulated device's output."""
        result = registry.match_command(
            namespace=request.namespace,
            device_name=request.device_name,
            user_input=request.command,
            enabled_only=request.enabled_only,
        )
        payload = MatchResponse(match_type=result.match_type, output=result.output)
        return _envelope(200, "SUCCESS", result.match_type.value, payload)

    @app.get(BASE_PATH + "/{command_id}", response_model=ApiEnvelope)
    def get_command(command_id: str) -> JSONResponse:
        record = registry.get_command(_parse_id(command_id))
        return _envelope(200, "SUCCESS", "OK", record)

    @app.put(BASE_PATH + "/{command_id}", response_model=ApiEnvelope)
    def update_command(command_id: str, request: UpdateSimDeviceCommand) -> JSONResponse:
        """Update a command; colliding with another record's key merges into it."""
        record, merged = registry.update_command(
            _parse_id(command_id),
            namespace=request.namespace,
            device_name=request.device_name,
            command=request.command,
            output=request.output,
            enabled=request.enabled,
        )
        message = "Merged into existing record" if merged else "Updated"
        return _envelope(200, "SUCCESS", message, record)

    @app.delete(BASE_PATH + "/{command_id}", response_model=ApiEnvelope)
    def delete_command(command_id: str) -> JSONResponse:
        registry.delete_command(_parse_id(command_id))
        return _envelope(200, "SUCCESS", "Deleted")

    apply_extra_routes(app)

    return app
