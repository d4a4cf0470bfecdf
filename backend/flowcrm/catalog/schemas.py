"""Configuration fields the editing panel renders for each node subtype.

Each field maps to ``{label, type, ...}`` where ``type`` is one of ``text``,
``number``, ``textarea``, ``select``, ``switch``, ``slider``, ``code``,
``json`` or ``tags``.
"""

from __future__ import annotations

from typing import Any

FIELD_TYPES = frozenset(
    {"text", "number", "textarea", "select", "switch", "slider", "code", "json", "tags"}
)


def _options(*pairs: tuple[str, str]) -> list[dict[str, str]]:
    return [{"value": value, "label": label} for value, label in pairs]


CONFIG_SCHEMAS: dict[str, dict[str, dict[str, Any]]] = {
    "voice": {
        "source": {
            "label": "Input Source",
            "type": "select",
            "options": _options(
                ("microphone", "Microphone"),
                ("upload", "File Upload"),
                ("telegram", "Telegram Bot"),
                ("whatsapp", "WhatsApp"),
            ),
        },
        "language": {
            "label": "Language",
            "type": "select",
            "options": _options(
                ("en-US", "English (US)"),
                ("en-GB", "English (UK)"),
                ("es-ES", "Spanish"),
                ("fr-FR", "French"),
            ),
        },
        "autoStart": {"label": "Auto Start Recording", "type": "switch", "default": False},
    },
    "transcription": {
        "provider": {
            "label": "Transcription Provider",
            "type": "select",
            "options": _options(
                ("web-speech", "Web Speech API (Free)"),
                ("openai", "OpenAI Whisper"),
                ("google", "Google Speech-to-Text"),
            ),
        },
        "model": {
            "label": "Model",
            "type": "select",
            "options": _options(("whisper-1", "Whisper v1"), ("whisper-large", "Whisper Large")),
            "dependsOn": {"provider": "openai"},
        },
        "punctuation": {"label": "Auto Punctuation", "type": "switch", "default": True},
        "profanityFilter": {"label": "Profanity Filter", "type": "switch", "default": False},
    },
    "openai": {
        "model": {
            "label": "AI Model",
            "type": "select",
            "options": _options(
                ("gpt-4", "GPT-4"),
                ("gpt-3.5-turbo", "GPT-3.5 Turbo"),
                ("gpt-4-turbo", "GPT-4 Turbo"),
            ),
        },
        "temperature": {
            "label": "Temperature",
            "type": "slider",
            "min": 0,
            "max": 1,
            "step": 0.1,
            "default": 0.7,
        },
        "systemPrompt": {
            "label": "System Prompt",
            "type": "textarea",
            "default": "Extract key information from the transcription and format it for CRM entry.",
        },
        "maxTokens": {"label": "Max Tokens", "type": "number", "default": 500},
    },
    "database": {
        "table": {
            "label": "Table Name",
            "type": "select",
            "options": _options(
                ("communications", "Communications"),
                ("leads", "Leads"),
                ("clients", "Clients"),
                ("properties", "Properties"),
            ),
        },
        "action": {
            "label": "Action",
            "type": "select",
            "options": _options(
                ("insert", "Insert"),
                ("update", "Update"),
                ("upsert", "Upsert"),
                ("delete", "Delete"),
            ),
        },
        "mapping": {
            "label": "Field Mapping",
            "type": "json",
            "default": {
                "subject": "{{transcription.summary}}",
                "content": "{{transcription.full_text}}",
                "client_id": "{{extracted.client_id}}",
            },
        },
    },
    "condition": {
        "expression": {
            "label": "Condition Expression",
            "type": "code",
            "language": "javascript",
            "default": "return data.confidence > 0.8;",
        },
        "trueLabel": {"label": "True Path Label", "type": "text", "default": "High Confidence"},
        "falseLabel": {"label": "False Path Label", "type": "text", "default": "Low Confidence"},
    },
    "notification": {
        "channel": {
            "label": "Notification Channel",
            "type": "select",
            "options": _options(
                ("email", "Email"),
                ("sms", "SMS"),
                ("slack", "Slack"),
                ("webhook", "Webhook"),
            ),
        },
        "template": {
            "label": "Message Template",
            "type": "textarea",
            "default": "New communication from {{client.name}}: {{transcription.summary}}",
        },
        "recipients": {"label": "Recipients", "type": "tags", "default": []},
    },
}
