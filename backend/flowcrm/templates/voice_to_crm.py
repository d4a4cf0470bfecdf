"""Telegram voice note to CRM logging automation."""

TEMPLATE_ID = "voice-to-crm-default"
NAME = "Voice Note to CRM Logger"
DESCRIPTION = "Automatically transcribe and log voice notes from Telegram to client records"
CATEGORY = "Productivity"
TOOL_ID = "voiceToCRM"
REQUIRED_CREDENTIALS = ("telegram_bot_token", "openai_api_key")
TAGS = ("voice", "transcription", "telegram", "crm", "automation")

NODES = [
    {
        "id": "trigger-telegram",
        "type": "trigger",
        "position": {"x": 100, "y": 200},
        "data": {
            "label": "Telegram Voice Message",
            "type": "trigger",
            "subtype": "telegram",
            "description": "Receives voice messages from Telegram",
            "icon": "MessageCircle",
            "color": "bg-green-500",
            "config": {"messageType": "voice", "allowedUsers": [], "autoAcknowledge": True},
        },
    },
    {
        "id": "action-download",
        "type": "action",
        "position": {"x": 350, "y": 200},
        "data": {
            "label": "Download Audio",
            "type": "action",
            "subtype": "download",
            "description": "Download voice file from Telegram",
            "icon": "Download",
            "color": "bg-blue-500",
            # maxSize in MB, timeout in ms
            "config": {"source": "telegram", "maxSize": 25, "timeout": 30000},
        },
    },
    {
        "id": "action-transcribe",
        "type": "action",
        "position": {"x": 600, "y": 200},
        "data": {
            "label": "Transcribe Voice",
            "type": "action",
            "subtype": "transcription",
            "description": "Convert voice to text using Whisper",
            "icon": "Mic",
            "color": "bg-blue-500",
            "config": {
                "service": "openai-whisper",
                "model": "whisper-1",
                "language": "auto-detect",
                "temperature": 0,
                "response_format": "verbose_json",
            },
        },
    },
    {
        "id": "action-ai-process",
        "type": "action",
        "position": {"x": 850, "y": 200},
        "data": {
            "label": "AI Summary",
            "type": "action",
            "subtype": "ai-process",
            "description": "Summarize and extract key information",
            "icon": "Brain",
            "color": "bg-blue-500",
            "config": {
                "model": "gpt-4",
                "prompt": (
                    "Summarize this voice note and extract key points, "
                    "action items, and sentiment"
                ),
                "extractEntities": True,
                "generateTitle": True,
                "maxTokens": 500,
            },
        },
    },
    {
        "id": "logic-client-check",
        "type": "logic",
        "position": {"x": 1100, "y": 200},
        "data": {
            "label": "Check Client Link",
            "type": "logic",
            "subtype": "condition",
            "description": "Check if chat is linked to a client",
            "icon": "GitBranch",
            "color": "bg-amber-500",
            "config": {
                "condition": "has_client_mapping",
                "field": "chat_client_mapping",
                "operator": "exists",
            },
        },
    },
    {
        "id": "action-update-client",
        "type": "action",
        "position": {"x": 1350, "y": 120},
        "data": {
            "label": "Update Client Record",
            "type": "action",
            "subtype": "crm-update",
            "description": "Add communication to client history",
            "icon": "Database",
            "color": "bg-blue-500",
            "config": {
                "updateType": "add_communication",
                "table": "client_communications",
                "fields": {
                    "communication_type": "voice",
                    "direction": "incoming",
                    "channel": "telegram",
                },
            },
        },
    },
    {
        "id": "action-create-note",
        "type": "action",
        "position": {"x": 1350, "y": 280},
        "data": {
            "label": "Create General Note",
            "type": "action",
            "subtype": "crm-update",
            "description": "Create note without client link",
            "icon": "FileText",
            "color": "bg-blue-500",
            "config": {
                "updateType": "create_note",
                "table": "client_communications",
                "fields": {
                    "communication_type": "note",
                    "direction": "incoming",
                    "channel": "telegram",
                },
            },
        },
    },
    {
        "id": "action-notify-success",
        "type": "action",
        "position": {"x": 1600, "y": 200},
        "data": {
            "label": "Send Confirmation",
            "type": "action",
            "subtype": "notification",
            "description": "Notify user of successful processing",
            "icon": "Send",
            "color": "bg-blue-500",
            "config": {
                "channel": "telegram",
                "messageTemplate": (
                    "Voice note processed successfully!\n\n"
                    "Summary: {{summary}}\n\n"
                    "{{#if client}}Client: {{client.name}}{{/if}}\n\n"
                    "Logged to CRM"
                ),
                "includeActionItems": True,
                "includeKeyPoints": True,
            },
        },
    },
    {
        "id": "action-error-handler",
        "type": "action",
        "position": {"x": 600, "y": 400},
        "data": {
            "label": "Error Handler",
            "type": "action",
            "subtype": "error-handler",
            "description": "Handle processing errors",
            "icon": "AlertCircle",
            "color": "bg-red-500",
            "config": {
                "retryCount": 2,
                "retryDelay": 5000,
                "notifyOnError": True,
                "errorMessageTemplate": (
                    "Error processing voice note: {{error}}\n\n"
                    "Please try again or contact support."
                ),
            },
        },
    },
]

EDGES = [
    {"id": "e1", "source": "trigger-telegram", "target": "action-download", "animated": True},
    {"id": "e2", "source": "action-download", "target": "action-transcribe", "animated": True},
    {"id": "e3", "source": "action-transcribe", "target": "action-ai-process", "animated": True},
    {"id": "e4", "source": "action-ai-process", "target": "logic-client-check", "animated": True},
    {
        "id": "e5",
        "source": "logic-client-check",
        "sourceHandle": "true",
        "target": "action-update-client",
        "animated": True,
        "data": {"label": "Has Client"},
    },
    {
        "id": "e6",
        "source": "logic-client-check",
        "sourceHandle": "false",
        "target": "action-create-note",
        "animated": True,
        "data": {"label": "No Client"},
    },
    {"id": "e7", "source": "action-update-client", "target": "action-notify-success", "animated": True},
    {"id": "e8", "source": "action-create-note", "target": "action-notify-success", "animated": True},
]
