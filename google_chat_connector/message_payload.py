"""
Message payloads for message:create and message:update.

A payload comes from exactly one source per call:

  RawJson     The user pasted a JSON object (messageJson / updateOptionsJson).
  Structured  The user filled in individual fields (messageUi / textUi).

payload_source() reads the boolean flag parameter and returns one of the two,
so the create/update resolvers only ever see a single active mode.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from .exceptions import InvalidInput
from .json_validator import INVALID, validate_json


@dataclass
class MessagePayload:
    """Body of a Google Chat message (text and/or cards)."""

    text: Optional[str] = None
    cards: Optional[List[Dict[str, Any]]] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MessagePayload":
        extra = {k: v for k, v in data.items() if k not in ("text", "cards")}
        return cls(text=data.get("text"), cards=data.get("cards"), extra=extra)

    def to_body(self, fields: Optional[List[str]] = None) -> Dict[str, Any]:
        """Render the request body, optionally keeping only the given fields."""
        body = dict(self.extra)
        if self.text is not None:
            body["text"] = self.text
        if self.cards is not None:
            body["cards"] = self.cards
        if fields is not None:
            body = {k: v for k, v in body.items() if k in fields}
        return body


class UpdateMask:
    """Ordered set of message fields touched by an update."""

    def __init__(self, fields):
        if isinstance(fields, str):
            fields = [f.strip() for f in fields.split(",")]
        ordered = []
        for name in fields or []:
            if name and name not in ordered:
                ordered.append(name)
        if not ordered:
            raise InvalidInput("Update Mask must not be empty.")
        self.fields = ordered

    def __contains__(self, name: str) -> bool:
        return name in self.fields

    def __iter__(self):
        return iter(self.fields)

    def __len__(self):
        return len(self.fields)

    def render(self) -> str:
        return ",".join(self.fields)


@dataclass(frozen=True)
class RawJson:
    text: Any


@dataclass(frozen=True)
class Structured:
    fields: Dict[str, Any]


PayloadSource = Union[RawJson, Structured]


def payload_source(params, flag: str, json_param: str, ui_param: str) -> PayloadSource:
    """Pick the payload mode from the boolean flag parameter."""
    if params.get(flag):
        return RawJson(params.get(json_param))
    ui = params.get(ui_param)
    if not isinstance(ui, dict):
        # textUi is a bare string rather than a field collection
        ui = {"text": ui}
    return Structured(ui)


def _parse_raw(source: RawJson, error_message: str) -> MessagePayload:
    parsed = validate_json(source.text)
    if parsed is INVALID:
        raise InvalidInput(error_message)
    if not isinstance(parsed, dict):
        # Valid JSON with no fields to copy (null, a list, a scalar)
        return MessagePayload()
    return MessagePayload.from_dict(parsed)


def resolve_create_payload(source: PayloadSource) -> MessagePayload:
    """Build the payload for message:create."""
    if isinstance(source, RawJson):
        return _parse_raw(source, "Message (JSON) must be a valid json")

    text = source.fields.get("text")
    if not isinstance(text, str) or text == "":
        raise InvalidInput("Message Text must be provided.")
    return MessagePayload(text=text)


def resolve_update_payload(source: PayloadSource, mask: UpdateMask) -> MessagePayload:
    """Build the payload for message:update.

    In structured mode the text is only required when it is part of the mask.
    """
    if isinstance(source, RawJson):
        return _parse_raw(source, "Update Options (JSON) must be a valid json")

    payload = MessagePayload()
    if "text" in mask:
        text = source.fields.get("text")
        if not isinstance(text, str) or text == "":
            raise InvalidInput("Text input must be provided.")
        payload.text = text
    return payload
