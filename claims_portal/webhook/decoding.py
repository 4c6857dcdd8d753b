"""
Decoding of workflow replies.

n8n answers resume calls with whatever the workflow's 'Respond to Webhook'
node was configured to send: usually JSON, sometimes plain text. Callers
always get a JSON-compatible value back.
"""

import json
from typing import Any, Optional

from .exceptions import WebhookError


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


def parse_json(text) -> Any:
    """
    json.loads restricted to standard JSON.

    NaN, Infinity and -Infinity are rejected; they cannot be sent back out
    through a JSONResponse.
    """
    return json.loads(text, parse_constant=_reject_constant)


def decode_resume_body(content_type: Optional[str], text: str) -> Any:
    """
    Turn an upstream body into JSON data.

    - Declared JSON must parse, otherwise WebhookError.
    - Anything else is parsed opportunistically and, failing that,
      wrapped as {"message": text}.
    """
    if content_type and "application/json" in content_type:
        try:
            return parse_json(text)
        except ValueError as e:
            raise WebhookError(f"Workflow declared JSON but sent an invalid body: {e}") from e

    try:
        return parse_json(text)
    except ValueError:
        return {"message": text}


def decode_json_body(text: str) -> Any:
    try:
        return parse_json(text)
    except ValueError as e:
        raise WebhookError(f"Workflow sent a non-JSON body: {e}") from e
