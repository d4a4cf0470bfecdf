"""Database models for the FlowCRM workflow builder backend."""

from .workflow import Workflow

__all__ = ["Workflow"]
