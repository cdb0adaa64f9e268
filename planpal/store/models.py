"""SQL table backing the key-value store."""

from sqlalchemy import func

from planpal.extensions import db


class KVEntry(db.Model):
    """One JSON document addressed by its key."""

    __tablename__ = "kv_store"

    # Surrogate id keeps prefix scans in insertion order.
    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    key = db.Column(db.String(255), unique=True, nullable=False, index=True)
    value = db.Column(db.JSON, nullable=False)
    version = db.Column(db.Integer, nullable=False, default=1)
    created_at = db.Column(
        db.DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at = db.Column(
        db.DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    def __repr__(self):
        return f"<KVEntry {self.key} v{self.version}>"
