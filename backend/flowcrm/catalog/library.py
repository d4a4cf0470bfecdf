"""Node types offered in the builder's node library, grouped by category."""

from __future__ import annotations

from dataclasses import dataclass

from ..graph.types import NodeCategory


@dataclass(frozen=True)
class NodeType:
    """A creatable node subtype as listed in the library."""

    id: str
    label: str
    category: NodeCategory
    subtype: str
    icon: str
    color: str
    description: str


@dataclass(frozen=True)
class NodeGroup:
    key: str
    label: str
    color: str
    nodes: tuple[NodeType, ...]


_TRIGGER = NodeCategory.TRIGGER
_ACTION = NodeCategory.ACTION
_LOGIC = NodeCategory.LOGIC
_INTEGRATION = NodeCategory.INTEGRATION

GROUPS: tuple[NodeGroup, ...] = (
    NodeGroup(
        key="triggers",
        label="Triggers",
        color="from-green-500 to-green-600",
        nodes=(
            NodeType("manual-trigger", "Manual Trigger", _TRIGGER, "manual", "Clock", "bg-green-500", "Start workflow manually"),
            NodeType("webhook-trigger", "Webhook", _TRIGGER, "webhook", "Webhook", "bg-green-500", "Trigger via webhook"),
            NodeType("schedule-trigger", "Schedule", _TRIGGER, "schedule", "Calendar", "bg-green-500", "Run on schedule"),
        ),
    ),
    NodeGroup(
        key="actions",
        label="AI Actions",
        color="from-blue-500 to-blue-600",
        nodes=(
            NodeType("whatsapp-send", "WhatsApp Message", _ACTION, "whatsapp", "MessageCircle", "bg-blue-500", "Send WhatsApp message"),
            NodeType("lead-score", "Score Lead", _ACTION, "scoring", "Star", "bg-blue-500", "Calculate lead score"),
            NodeType("voice-transcribe", "Transcribe Voice", _ACTION, "transcription", "Mic", "bg-blue-500", "Convert voice to text"),
            NodeType("generate-doc", "Generate Document", _ACTION, "document", "FileText", "bg-blue-500", "Create PDF document"),
            NodeType("summarize-text", "Summarize Text", _ACTION, "nlp", "Bot", "bg-blue-500", "AI text summarization"),
            NodeType("verify-identity", "Verify Identity", _ACTION, "verification", "Shield", "bg-blue-500", "Document verification"),
        ),
    ),
    NodeGroup(
        key="logic",
        label="Logic",
        color="from-amber-500 to-amber-600",
        nodes=(
            NodeType("condition", "Condition", _LOGIC, "condition", "GitBranch", "bg-amber-500", "If/then branching"),
            NodeType("loop", "Loop", _LOGIC, "loop", "Repeat", "bg-amber-500", "Repeat actions"),
            NodeType("delay", "Delay", _LOGIC, "delay", "Timer", "bg-amber-500", "Wait before continuing"),
            NodeType("filter", "Filter", _LOGIC, "filter", "Filter", "bg-amber-500", "Filter data"),
            NodeType("router", "Router", _LOGIC, "router", "Shuffle", "bg-amber-500", "Route to multiple paths"),
        ),
    ),
    NodeGroup(
        key="integrations",
        label="Integrations",
        color="from-purple-500 to-purple-600",
        nodes=(
            NodeType("api-call", "API Call", _INTEGRATION, "api", "ExternalLink", "bg-purple-500", "External API request"),
            NodeType("database", "Database", _INTEGRATION, "database", "Database", "bg-purple-500", "Database operations"),
            NodeType("email", "Send Email", _INTEGRATION, "email", "Mail", "bg-purple-500", "Send email notification"),
        ),
    ),
)
