"""Saved workflow model definition."""

from __future__ import annotations

from datetime import datetime

from ..extensions import db


class Workflow(db.Model):
    """A persisted workflow record: metadata plus the serialised graph."""

    __tablename__ = "workflows"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), unique=True, nullable=False)
    description = db.Column(db.Text, nullable=False, default="")
    tool_id = db.Column(db.String(120), nullable=False, default="")
    workflow_data = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    def __repr__(self) -> str:  # pragma: no cover - repr not critical for tests
        return f"<Workflow {self.name!r}>"
