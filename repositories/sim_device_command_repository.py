"""
Repository for simulated device commands.

Provides the store primitives the registry service and the dedup resolver
build on. Every mutating method commits on success and rolls back on
failure, re-raising the original error so the caller's retry wrapper can
tell transient contention apart from other failures.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from models.sim_device_command import SimDeviceCommand
from utils.command_normalizer import normalize_command


class SimDeviceCommandRepository:
    """Repository for sim_device_commands CRUD operations."""

    def __init__(self, db: Session):
        self.db = db

    def add(
        self,
        namespace: str,
        device_name: str,
        command: str,
        output: str,
        enabled: bool,
    ) -> SimDeviceCommand:
        """
        Insert a new command record.

        Returns:
            The created record with its store-assigned id
        """
        now = datetime.now(timezone.utc)
        record = SimDeviceCommand(
            namespace=namespace,
            device_name=device_name,
            command=command,
            output=output,
            enabled=enabled,
            created_at=now,
            updated_at=now,
        )
        try:
            self.db.add(record)
            self.db.commit()
            self.db.refresh(record)
            return record
        except Exception:
            self.db.rollback()
            raise

    def get(self, command_id: int) -> Optional[SimDeviceCommand]:
        return self.db.query(SimDeviceCommand).filter_by(id=command_id).first()

    def find_by_key(
        self,
        namespace: str,
        device_name: str,
        command: str,
        exclude_id: Optional[int] = None,
    ) -> Optional[SimDeviceCommand]:
        """
        Find the first record occupying a (namespace, device, command) key.

        Commands are compared in normalized form, so casing and whitespace
        runs do not distinguish two keys. Whitespace cannot be collapsed in
        SQL, so rows are narrowed by their lower-cased leading word and the
        remaining rows are compared in Python. SQLite lower() only folds
        ASCII, so a non-ASCII leading word skips the narrowing and every row
        of the device is compared.

        Args:
            namespace: Namespace to search in
            device_name: Device to search in
            command: Command text, compared after normalization
            exclude_id: Skip the record with this id (the one being updated)

        Returns:
            The lowest-id record holding the key, or None
        """
        wanted = normalize_command(command)
        query = self.db.query(SimDeviceCommand).filter_by(
            namespace=namespace, device_name=device_name
        )
        if exclude_id is not None:
            query = query.filter(SimDeviceCommand.id != exclude_id)

        leading_word = wanted.split(" ", 1)[0]
        if leading_word and leading_word.isascii():
            query = query.filter(
                func.lower(SimDeviceCommand.command).startswith(leading_word, autoescape=True)
            )

        for record in query.order_by(SimDeviceCommand.id.asc()).all():
            if normalize_command(record.command) == wanted:
                return record
        return None

    def list(
        self,
        namespace: Optional[str] = None,
        device_name: Optional[str] = None,
        enabled: Optional[bool] = None,
    ) -> List[SimDeviceCommand]:
        """
        List records, most recently updated first.

        Each filter is applied only when given.
        """
        query = self.db.query(SimDeviceCommand)
        if namespace:
            query = query.filter(SimDeviceCommand.namespace == namespace)
        if device_name:
            query = query.filter(SimDeviceCommand.device_name == device_name)
        if enabled is not None:
            query = query.filter_by(enabled=enabled)
        return query.order_by(
            SimDeviceCommand.updated_at.desc(), SimDeviceCommand.id.desc()
        ).all()

    def list_for_device(
        self, namespace: str, device_name: str, enabled_only: bool = False
    ) -> List[SimDeviceCommand]:
        """Load the match candidates of one device in store (id) order."""
        query = self.db.query(SimDeviceCommand).filter_by(
            namespace=namespace, device_name=device_name
        )
        if enabled_only:
            query = query.filter_by(enabled=True)
        return query.order_by(SimDeviceCommand.id.asc()).all()

    def update_fields(
        self, record: SimDeviceCommand, fields: Dict[str, Any]
    ) -> SimDeviceCommand:
        """
        Apply a partial field map to a record and refresh its updated_at.

        Returns:
            The refreshed record
        """
        try:
            for name, value in fields.items():
                setattr(record, name, value)
            record.updated_at = datetime.now(timezone.utc)
            self.db.commit()
            self.db.refresh(record)
            return record
        except Exception:
            self.db.rollback()
            raise

    def delete(self, command_id: int) -> bool:
        """
        Delete a record by id.

        Returns:
            True if a record was deleted, False if not found
        """
        try:
            result = (
                self.db.query(SimDeviceCommand)
                .filter_by(id=command_id)
                .delete()
            )
            self.db.commit()
            return result > 0
        except Exception:
            self.db.rollback()
            raise
