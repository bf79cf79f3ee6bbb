from __future__ import annotations

from ..extensions import db
from stitchflow.time_utils import to_utc_z


class StateSlice(db.Model):
    """
    One persisted slice of application state, stored as a JSON blob.

    WHY: Each record collection (customers, orders, ...) and the singleton
    settings record is loaded and saved independently by key, mirroring a
    browser key-value store. All slices are written together on every mutation.
    """
    __tablename__ = "state_slices"

    key = db.Column(db.String(64), primary_key=True)
    value = db.Column(db.Text, nullable=False)

    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now(), onupdate=db.func.now())

    def to_dict(self):
        return {
            "key": self.key,
            "size_bytes": len(self.value or ""),
            "updated_at": to_utc_z(self.updated_at),
        }
