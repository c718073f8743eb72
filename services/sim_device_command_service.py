"""
Registry of simulated device commands.

Validates requests, opens a session per operation and delegates to the
repository, the dedup resolver and the command matcher. Records leave this
module as SimDeviceCommandResponse snapshots, detached from the session.
"""

import logging
from typing import Callable, List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from db import DEFAULT_RETRY_ATTEMPTS, SessionLocal, with_retry
from exceptions.sim_device_command_errors import (
    CommandNotFoundError,
    CommandStoreError,
    CommandValidationError,
)
from models.sim_device_command import SimDeviceCommandResponse, UpdateSimDeviceCommand
from repositories.sim_device_command_repository import SimDeviceCommandRepository
from services.command_dedup_resolver import CommandDedupResolver
from utils.command_matcher import MatchResult, match_command
from utils.config_service import Config

logger = logging.getLogger(__name__)


def _require_fields(namespace: str, device_name: str, command: str) -> Tuple[str, str, str]:
    namespace = (namespace or "").strip()
    device_name = (device_name or "").strip()
    command = (command or "").strip()
    if not namespace or not device_name or not command:
        raise CommandValidationError(
            "MISSING_FIELDS", "namespace, device_name and command must not be empty"
        )
    return namespace, device_name, command


# Largest id the store's signed 64-bit INTEGER column can hold
MAX_COMMAND_ID = 2**63 - 1


def _require_valid_id(command_id: int) -> int:
    if isinstance(command_id, bool) or not isinstance(command_id, int):
        raise CommandValidationError("INVALID_ID", "Invalid id")
    if command_id <= 0 or command_id > MAX_COMMAND_ID:
        raise CommandValidationError("INVALID_ID", "Invalid id")
    return command_id


class SimDeviceCommandService:
    """Create, list, get, update, delete and match simulated device commands."""

    def __init__(
        self,
        session_factory: Optional[Callable[[], Session]] = None,
        max_attempts: Optional[int] = None,
        retry_delay: Optional[float] = None,
    ):
        self._session_factory = session_factory or SessionLocal
        if max_attempts is None:
            max_attempts = Config.get_int("store_retry_attempts", DEFAULT_RETRY_ATTEMPTS)
        if retry_delay is None:
            retry_delay = Config.get_int("store_retry_delay_ms", 100) / 1000.0
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay

    def _resolver(self, repo: SimDeviceCommandRepository) -> CommandDedupResolver:
        return CommandDedupResolver(repo, self.max_attempts, self.retry_delay)

    def create_command(
        self,
        namespace: str,
        device_name: str,
        command: str,
        output: str = "",
        enabled: bool = False,
    ) -> Tuple[SimDeviceCommandResponse, bool]:
        """
        Register a command, refreshing the existing record for the same key.

        Returns:
            (record, created)
        """
        namespace, device_name, command = _require_fields(namespace, device_name, command)
        with self._session_factory() as session:
            repo = SimDeviceCommandRepository(session)
            record, created = self._resolver(repo).create_or_refresh(
                namespace, device_name, command, output or "", enabled
            )
            return SimDeviceCommandResponse.model_validate(record), created

    def list_commands(
        self,
        namespace: Optional[str] = None,
        device_name: Optional[str] = None,
        enabled: Optional[bool] = None,
    ) -> List[SimDeviceCommandResponse]:
        """List commands, most recently updated first."""
        namespace = (namespace or "").strip() or None
        device_name = (device_name or "").strip() or None
        with self._session_factory() as session:
            repo = SimDeviceCommandRepository(session)
            try:
                records = repo.list(namespace=namespace, device_name=device_name, enabled=enabled)
            except SQLAlchemyError as e:
                logger.error("List sim device commands failed: %s", e)
                raise CommandStoreError("LIST_FAILED", "List sim device commands", e) from e
            return [SimDeviceCommandResponse.model_validate(r) for r in records]

    def get_command(self, command_id: int) -> SimDeviceCommandResponse:
        _require_valid_id(command_id)
        with self._session_factory() as session:
            repo = SimDeviceCommandRepository(session)
            record = self._load(repo, command_id)
            return SimDeviceCommandResponse.model_validate(record)

    def update_command(
        self,
        command_id: int,
        namespace: str = "",
        device_name: str = "",
        command: str = "",
        output: str = "",
        enabled: bool = False,
    ) -> Tuple[SimDeviceCommandResponse, bool]:
        """
        Update a command, merging it into the record that already holds the
        resulting key if there is one.

        Returns:
            (record, merged) where record is the survivor of a merge
        """
        _require_valid_id(command_id)
        changes = UpdateSimDeviceCommand(
            namespace=namespace or "",
            device_name=device_name or "",
            command=command or "",
            output=output or "",
            enabled=enabled,
        )
        with self._session_factory() as session:
            repo = SimDeviceCommandRepository(session)
            record = self._load(repo, command_id)
            updated, merged = self._resolver(repo).update_or_merge(record, changes)
            return SimDeviceCommandResponse.model_validate(updated), merged

    def delete_command(self, command_id: int) -> None:
        """Delete a command. Deleting an absent id is not an error."""
        _require_valid_id(command_id)
        with self._session_factory() as session:
            repo = SimDeviceCommandRepository(session)
            try:
                with_retry(lambda: repo.delete(command_id), self.max_attempts, self.retry_delay)
            except SQLAlchemyError as e:
                logger.error("Delete sim device command failed: %s", e)
                raise CommandStoreError("DELETE_FAILED", "Delete sim device command", e) from e

    def match_command(
        self,
        namespace: str,
        device_name: str,
        user_input: str,
        enabled_only: bool = False,
    ) -> MatchResult:
        """
        Answer a typed command the way the simulated device would.

        Args:
            namespace: Namespace of the device
            device_name: Device the command is typed on
            user_input: Raw command text
            enabled_only: Ignore disabled commands when True

        Returns:
            MatchResult with the match type and the output to print
        """
        namespace, device_name, user_input = _require_fields(namespace, device_name, user_input)
        with self._session_factory() as session:
            repo = SimDeviceCommandRepository(session)
            try:
                candidates = repo.list_for_device(namespace, device_name, enabled_only=enabled_only)
            except SQLAlchemyError as e:
                logger.error("Load sim device commands for match failed: %s", e)
                raise CommandStoreError("DB_ERROR", "Match sim device command", e) from e
            return match_command(user_input, candidates)

    @staticmethod
    def _load(repo: SimDeviceCommandRepository, command_id: int):
        try:
            record = repo.get(command_id)
        except SQLAlchemyError as e:
            logger.error("Get sim device command failed: %s", e)
            raise CommandStoreError("DB_ERROR", "Get sim device command", e) from e
        if record is None:
            raise CommandNotFoundError(command_id)
        return record
