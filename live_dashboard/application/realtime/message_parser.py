"""Decoding of raw live channel frames into LiveEvents"""

import json
import logging
from typing import Any, Mapping, Optional, Union

from .events import LiveEvent, LiveEventKind
from ...core.exceptions import PayloadError
from ...domain.constants.message_types import MessageFields, ServerMessageTypes
from ...utils.datetime_utils import parse_timestamp

logger = logging.getLogger(__name__)

CONTROL_MESSAGE_TYPES = frozenset({
    ServerMessageTypes.PONG,
    ServerMessageTypes.HEARTBEAT,
    ServerMessageTypes.SUBSCRIPTION_CONFIRMED,
})

_DATA_KINDS = {kind.value: kind for kind in LiveEventKind if not kind.is_lifecycle}


class ParsedFrame:
    """Result of decoding one frame: either a data event or a control message."""

    __slots__ = ("event", "control_type", "data")

    def __init__(
        self,
        event: Optional[LiveEvent] = None,
        control_type: Optional[str] = None,
        data: Any = None,
    ):
        self.event = event
        self.control_type = control_type
        self.data = data

    @property
    def is_control(self) -> bool:
        return self.control_type is not None


def decode_frame(raw: Union[str, bytes]) -> Mapping[str, Any]:
    """
    Decode a raw text frame into its JSON envelope.

    Raises:
        PayloadError: If the frame is not a JSON object with a string "type"
    """
    try:
        message = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise PayloadError(f"Live frame is not valid JSON: {e}", kind="live frame") from e

    if not isinstance(message, dict):
        raise PayloadError(
            f"Live frame must be a JSON object, got {type(message).__name__}", kind="live frame"
        )
    message_type = message.get(MessageFields.TYPE)
    if not isinstance(message_type, str) or not message_type:
        raise PayloadError("Live frame has no message type", kind="live frame")
    return message


def parse_frame(raw: Union[str, bytes]) -> Optional[ParsedFrame]:
    """
    Turn a raw frame into a ParsedFrame.

    Returns None for well-formed frames of an unknown type (logged at debug
    level, since newer servers may push types this client does not know).

    Raises:
        PayloadError: If the frame cannot be decoded at all
    """
    message = decode_frame(raw)
    message_type = message[MessageFields.TYPE]
    data = message.get(MessageFields.DATA)

    if message_type in CONTROL_MESSAGE_TYPES:
        return ParsedFrame(control_type=message_type, data=data)

    kind = _DATA_KINDS.get(message_type)
    if kind is None:
        logger.debug(f"Ignoring live message of unknown type '{message_type}'")
        return None

    event = LiveEvent(
        kind=kind,
        data=data,
        timestamp=parse_timestamp(message.get(MessageFields.TIMESTAMP)),
    )
    return ParsedFrame(event=event)
