"""Basic voice to text conversion without AI processing."""

TEMPLATE_ID = "voice-simple-transcription"
NAME = "Simple Voice Transcription"
DESCRIPTION = "Basic voice to text conversion without AI processing"
CATEGORY = "Basic"
TOOL_ID = "voiceToCRM"
REQUIRED_CREDENTIALS = ("telegram_bot_token", "openai_api_key")
TAGS = ("voice", "transcription", "simple")

NODES = [
    {
        "id": "trigger-1",
        "type": "trigger",
        "position": {"x": 100, "y": 100},
        "data": {
            "label": "Telegram Voice",
            "type": "trigger",
            "subtype": "telegram",
            "config": {"messageType": "voice"},
        },
    },
    {
        "id": "action-1",
        "type": "action",
        "position": {"x": 300, "y": 100},
        "data": {
            "label": "Transcribe",
            "type": "action",
            "subtype": "transcription",
            "config": {"service": "openai-whisper"},
        },
    },
    {
        "id": "action-2",
        "type": "action",
        "position": {"x": 500, "y": 100},
        "data": {
            "label": "Save to CRM",
            "type": "action",
            "subtype": "crm-update",
            "config": {"updateType": "create_note"},
        },
    },
    {
        "id": "action-3",
        "type": "action",
        "position": {"x": 700, "y": 100},
        "data": {
            "label": "Notify",
            "type": "action",
            "subtype": "notification",
            "config": {"channel": "telegram"},
        },
    },
]

EDGES = [
    {"id": "e1", "source": "trigger-1", "target": "action-1", "animated": True},
    {"id": "e2", "source": "action-1", "target": "action-2", "animated": True},
    {"id": "e3", "source": "action-2", "target": "action-3", "animated": True},
]
