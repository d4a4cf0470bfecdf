"""Starter graph shown when the automation builder opens."""

TEMPLATE_ID = "voice-crm-pipeline"
NAME = "Voice to CRM Workflow"
DESCRIPTION = "Automated voice processing pipeline for CRM"
CATEGORY = "Starter"
TOOL_ID = "voice-crm"
REQUIRED_CREDENTIALS = ("openai_api_key",)
TAGS = ("voice", "transcription", "crm")

_EDGE_STYLE = {
    "animated": True,
    "style": {"strokeWidth": 2},
    "markerEnd": {"type": "arrowclosed", "width": 20, "height": 20},
}

NODES = [
    {
        "id": "1",
        "type": "trigger",
        "position": {"x": 100, "y": 100},
        "data": {
            "label": "Voice Input",
            "type": "trigger",
            "subtype": "voice",
            "config": {"source": "microphone", "language": "en-US"},
            "description": "Captures voice input from microphone or file upload",
            "icon": "Mic",
            "color": "#10b981",
        },
    },
    {
        "id": "2",
        "type": "action",
        "position": {"x": 350, "y": 100},
        "data": {
            "label": "Transcribe Audio",
            "type": "action",
            "subtype": "transcription",
            "config": {"provider": "web-speech", "model": "default"},
            "description": "Converts audio to text using Web Speech API or OpenAI",
            "icon": "FileAudio",
            "color": "#3b82f6",
        },
    },
    {
        "id": "3",
        "type": "integration",
        "position": {"x": 600, "y": 100},
        "data": {
            "label": "AI Processing",
            "type": "integration",
            "subtype": "openai",
            "config": {"model": "gpt-3.5-turbo", "temperature": 0.7},
            "description": "Process transcription with AI to extract CRM data",
            "icon": "Brain",
            "color": "#8b5cf6",
        },
    },
    {
        "id": "4",
        "type": "action",
        "position": {"x": 850, "y": 100},
        "data": {
            "label": "Save to CRM",
            "type": "action",
            "subtype": "database",
            "config": {"table": "communications", "action": "insert"},
            "description": "Store processed data in CRM database",
            "icon": "Database",
            "color": "#3b82f6",
        },
    },
    {
        "id": "5",
        "type": "logic",
        "position": {"x": 350, "y": 250},
        "data": {
            "label": "Check Quality",
            "type": "logic",
            "subtype": "condition",
            "config": {"condition": "transcription.confidence > 0.8"},
            "description": "Validate transcription quality",
            "icon": "GitBranch",
            "color": "#f59e0b",
        },
    },
    {
        "id": "6",
        "type": "action",
        "position": {"x": 600, "y": 350},
        "data": {
            "label": "Send Notification",
            "type": "action",
            "subtype": "notification",
            "config": {"channel": "email", "template": "new_communication"},
            "description": "Notify team about new communication",
            "icon": "Bell",
            "color": "#3b82f6",
        },
    },
]

EDGES = [
    {"id": "e1-2", "source": "1", "target": "2", **_EDGE_STYLE},
    {"id": "e2-3", "source": "2", "target": "3", **_EDGE_STYLE},
    {"id": "e3-4", "source": "3", "target": "4", **_EDGE_STYLE},
    {"id": "e2-5", "source": "2", "target": "5", **_EDGE_STYLE},
    {"id": "e5-6", "source": "5", "target": "6", **_EDGE_STYLE, "data": {"label": "Low confidence"}},
    {"id": "e4-6", "source": "4", "target": "6", **_EDGE_STYLE},
]
