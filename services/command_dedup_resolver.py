"""
Keeps (namespace, device_name, command) unique across create and update.

Uniqueness is resolved at write time instead of through a table constraint:
- create on an occupied key refreshes the occupying record (latest write wins)
- update onto a key held by another record merges into that record and
  deletes the one being updated

Lookup and write are separate store calls, so two concurrent writers can both
see a key as free, or both merge onto the same record. The duplicate left
behind converges the next time a write touches that key. Deployments needing
strict uniqueness must serialize writes per key outside this class.
"""

import logging
from typing import Any, Callable, Dict, Tuple, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from db import DEFAULT_RETRY_ATTEMPTS, DEFAULT_RETRY_DELAY_SECONDS, with_retry
from exceptions.sim_device_command_errors import CommandStoreError
from models.sim_device_command import SimDeviceCommand, UpdateSimDeviceCommand
from repositories.sim_device_command_repository import SimDeviceCommandRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CommandDedupResolver:
    """Applies creates and updates while enforcing the uniqueness key."""

    def __init__(
        self,
        repository: SimDeviceCommandRepository,
        max_attempts: int = DEFAULT_RETRY_ATTEMPTS,
        retry_delay: float = DEFAULT_RETRY_DELAY_SECONDS,
    ):
        self.repository = repository
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay

    def _retry(self, operation: Callable[[], T]) -> T:
        return with_retry(operation, self.max_attempts, self.retry_delay)

    def create_or_refresh(
        self,
        namespace: str,
        device_name: str,
        command: str,
        output: str,
        enabled: bool,
    ) -> Tuple[SimDeviceCommand, bool]:
        """
        Insert a command, or refresh the record already holding its key.

        A false enabled flag is indistinguishable from an omitted one and
        means "enabled", so records are always enabled through this path.

        Args:
            namespace: Trimmed, non-blank namespace
            device_name: Trimmed, non-blank device name
            command: Trimmed, non-blank command text
            output: Canned output, stored as given
            enabled: Requested enabled flag

        Returns:
            (record, created) where created is False when an existing record
            was refreshed

        Raises:
            CommandStoreError: UPSERT_FAILED or CREATE_FAILED after retries
        """
        if not enabled:
            enabled = True

        try:
            existing = self.repository.find_by_key(namespace, device_name, command)
        except SQLAlchemyError as e:
            logger.error("Lookup sim device command failed: %s", e)
            raise CommandStoreError("CREATE_FAILED", "Create sim device command", e) from e

        if existing is not None:
            update = {"output": output, "enabled": enabled}
            try:
                record = self._retry(lambda: self.repository.update_fields(existing, update))
            except SQLAlchemyError as e:
                logger.error("Upsert sim device command failed: %s", e)
                raise CommandStoreError("UPSERT_FAILED", "Upsert sim device command", e) from e
            logger.info("Refreshed sim device command %s", record.id)
            return record, False

        try:
            record = self._retry(
                lambda: self.repository.add(namespace, device_name, command, output, enabled)
            )
        except SQLAlchemyError as e:
            logger.error("Create sim device command failed: %s", e)
            raise CommandStoreError("CREATE_FAILED", "Create sim device command", e) from e
        return record, True

    def update_or_merge(
        self, record: SimDeviceCommand, changes: UpdateSimDeviceCommand
    ) -> Tuple[SimDeviceCommand, bool]:
        """
        Update a record, merging it into another record on a key collision.

        Blank namespace, device_name and command keep the current value, as
        does a blank output. The enabled flag is always applied as given.

        Returns:
            (record, merged): the updated record, or the surviving record
            with merged=True when the target was folded into it

        Raises:
            CommandStoreError: MERGE_FAILED or UPDATE_FAILED after retries
        """
        target_id = record.id
        new_namespace = changes.namespace.strip() or record.namespace
        new_device = changes.device_name.strip() or record.device_name
        new_command = changes.command.strip() or record.command
        has_output = bool(changes.output.strip())

        try:
            other = self.repository.find_by_key(
                new_namespace, new_device, new_command, exclude_id=target_id
            )
        except SQLAlchemyError as e:
            logger.error("Lookup sim device command failed: %s", e)
            raise CommandStoreError("UPDATE_FAILED", "Update sim device command", e) from e

        if other is not None:
            return self._merge(record, other, changes, has_output), True

        update: Dict[str, Any] = {}
        if new_namespace != record.namespace:
            update["namespace"] = new_namespace
        if new_device != record.device_name:
            update["device_name"] = new_device
        if new_command != record.command:
            update["command"] = new_command
        if has_output:
            update["output"] = changes.output
        update["enabled"] = changes.enabled

        try:
            updated = self._retry(lambda: self.repository.update_fields(record, update))
        except SQLAlchemyError as e:
            logger.error("Update sim device command failed: %s", e)
            raise CommandStoreError("UPDATE_FAILED", "Update sim device command", e) from e
        return updated, False

    def _merge(
        self,
        record: SimDeviceCommand,
        other: SimDeviceCommand,
        changes: UpdateSimDeviceCommand,
        has_output: bool,
    ) -> SimDeviceCommand:
        target_id = record.id
        update = {
            "output": changes.output if has_output else record.output,
            "enabled": changes.enabled,
        }
        try:
            survivor = self._retry(lambda: self.repository.update_fields(other, update))
        except SQLAlchemyError as e:
            logger.error("Merge sim device command failed: %s", e)
            raise CommandStoreError("MERGE_FAILED", "Merge sim device command", e) from e

        # The survivor already carries the merged state; a leftover target is
        # merged again by the next write that touches its key.
        try:
            self._retry(lambda: self.repository.delete(target_id))
        except SQLAlchemyError as e:
            logger.error("Delete merged sim device command %s failed: %s", target_id, e)

        logger.info("Merged sim device command %s into %s", target_id, survivor.id)
        return survivor
