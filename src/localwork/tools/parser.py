"""Extraction of delimited tool calls from generated text.

Generated responses embed calls as:

    <tool_call>{"name": "read_file", "arguments": {"path": "/tmp/a.txt"}}</tool_call>

Parsing is lenient: malformed payloads are skipped and an unterminated block
ends the scan, so prose that merely resembles the syntax never breaks the
agent loop. Callers must not assume one block yields one call.
"""

import json
from typing import Any

from localwork.telemetry import TOOL_CALL_PARSE_SKIPPED, get_logger
from localwork.tools.types import ToolCall

log = get_logger(__name__)

TOOL_CALL_START = "<tool_call>"
TOOL_CALL_END = "</tool_call>"


def _decode_payload(payload: str) -> tuple[str, dict[str, Any]] | None:
    """Decode one block payload into (name, arguments), or None if malformed."""
    try:
        parsed = json.loads(payload)
    except (ValueError, RecursionError):
        # Deeply nested payloads exhaust the decoder stack
        return None

    if not isinstance(parsed, dict):
        return None
    name = parsed.get("name")
    arguments = parsed.get("arguments")
    if not isinstance(name, str) or not isinstance(arguments, dict):
        return None
    return name, arguments


def parse_tool_calls(text: str) -> list[ToolCall]:
    """Parse every well-formed tool call block, left to right.

    Args:
        text: Raw generated text.

    Returns:
        Tool calls with sequential ids (call_0, call_1, ...) and no result.
        Empty if the text has no usable blocks.
    """
    tool_calls: list[ToolCall] = []
    pos = 0

    while (start := text.find(TOOL_CALL_START, pos)) != -1:
        payload_start = start + len(TOOL_CALL_START)
        end = text.find(TOOL_CALL_END, payload_start)
        if end == -1:
            log.debug(TOOL_CALL_PARSE_SKIPPED, reason="unterminated", offset=start)
            break

        decoded = _decode_payload(text[payload_start:end].strip())
        if decoded is None:
            log.debug(TOOL_CALL_PARSE_SKIPPED, reason="malformed", offset=start)
        else:
            name, arguments = decoded
            tool_calls.append(
                ToolCall(id=f"call_{len(tool_calls)}", name=name, arguments=arguments)
            )

        pos = end + len(TOOL_CALL_END)

    return tool_calls


def extract_text_content(text: str) -> str:
    """Remove all terminated tool call blocks and trim the remaining prose.

    Unterminated blocks are left in place. Only leading and trailing
    whitespace is trimmed; blank lines at splice points are kept.

    Args:
        text: Raw generated text.

    Returns:
        The prose surrounding the tool calls.
    """
    parts: list[str] = []
    pos = 0

    while (start := text.find(TOOL_CALL_START, pos)) != -1:
        end = text.find(TOOL_CALL_END, start)
        if end == -1:
            break
        parts.append(text[pos:start])
        pos = end + len(TOOL_CALL_END)

    parts.append(text[pos:])
    return "".join(parts).strip()
