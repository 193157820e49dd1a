import uuid
from datetime import datetime
from typing import Optional, Dict, Any

from sqlalchemy.orm import Session

from database import ActivationRequestRecord, ACTIVATION_STATUSES

UPDATABLE_FIELDS = ("confirmation_id", "status", "error_message", "processing_time")


class ActivationRequestStore:
    def __init__(self, db: Session):
        self.db = db

    def create(self, installation_id: str, product_version: str) -> ActivationRequestRecord:
        """
        Create a pending activation request record.
        """
        record = ActivationRequestRecord(
            id=str(uuid.uuid4()),
            installation_id=installation_id,
            product_version=product_version,
            status="pending",
            created_at=datetime.utcnow(),
        )
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        return record

    def update(self, record_id: str, updates: Dict[str, Any]) -> Optional[ActivationRequestRecord]:
        """
        Apply a partial update to a record.

        The row is locked for the read-modify-write where the backend
        supports it. Returns None when the record does not exist.
        """
        unknown = set(updates) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update fields: {', '.join(sorted(unknown))}")
        if "status" in updates and updates["status"] not in ACTIVATION_STATUSES:
            raise ValueError(f"Invalid status: {updates['status']}")

        record = self.db.query(ActivationRequestRecord).filter(
            ActivationRequestRecord.id == record_id
        ).with_for_update().first()

        if not record:
            self.db.rollback()
            return None

        for field, value in updates.items():
            setattr(record, field, value)

        self.db.commit()
        self.db.refresh(record)
        return record

    def get(self, record_id: str) -> Optional[ActivationRequestRecord]:
        return self.db.query(ActivationRequestRecord).filter(
            ActivationRequestRecord.id == record_id
        ).first()
