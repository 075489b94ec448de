"""Event types sent by a node's event stream and their payloads."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import Any, Mapping

from casper_sdk.entities import Block, _hex_bytes, _parse_timestamp


class EventType(IntEnum):
    """Kinds of events delivered by the stream."""

    API_VERSION = 1
    BLOCK_ADDED = 2
    DEPLOY_PROCESSED = 3
    DEPLOY_ACCEPTED = 4
    DEPLOY_EXPIRED = 5
    EVENT_ID = 6
    FINALITY_SIGNATURE = 7
    STEP = 8
    FAULT = 9
    SHUTDOWN = 10


_EVENT_NAMES: dict[int, str] = {
    EventType.API_VERSION: "ApiVersion",
    EventType.BLOCK_ADDED: "BlockAdded",
    EventType.DEPLOY_PROCESSED: "DeployProcessed",
    EventType.DEPLOY_ACCEPTED: "DeployAccepted",
    EventType.DEPLOY_EXPIRED: "DeployExpired",
    EventType.STEP: "Step",
    EventType.FAULT: "Fault",
    EventType.FINALITY_SIGNATURE: "FinalitySignature",
    EventType.SHUTDOWN: "Shutdown",
}


def event_name(event_type: int) -> str:
    """Return the wire name of ``event_type``, or an empty string if it has none."""
    return _EVENT_NAMES.get(event_type, "")


def _field(data: Mapping[str, Any], key: str) -> Any:
    if key in data:
        return data[key]
    lowered = key.lower()
    for name, value in data.items():
        if name.lower() == lowered:
            return value
    return None


def _payload(data: bytes, key: str) -> Mapping[str, Any]:
    document = json.loads(data)
    if not isinstance(document, Mapping):
        raise ValueError(f"event must be a JSON object, got {type(document).__name__}")
    value = _field(document, key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ValueError(f"{key} payload must be a JSON object")
    return value


@dataclass
class APIVersionEvent:
    api_version: str


@dataclass
class BlockAddedEvent:
    block_hash: str
    block: Block


@dataclass
class DeployProcessedEvent:
    deploy_hash: str
    account: str
    timestamp: datetime | None
    ttl: str
    block_hash: str
    execution_result: dict[str, Any] = field(default_factory=dict)


@dataclass
class DeployAcceptedEvent:
    deploy: dict[str, Any]


@dataclass
class DeployExpiredEvent:
    deploy_hash: str


@dataclass
class FinalitySignatureEvent:
    block_hash: str
    era_id: int
    signature: bytes
    public_key: str


@dataclass
class FaultEvent:
    era_id: int
    public_key: str
    timestamp: datetime | None


@dataclass
class StepEvent:
    era_id: int
    execution_effect: dict[str, Any] = field(default_factory=dict)
    operations: list[Any] = field(default_factory=list)
    transform: Any = None


@dataclass
class RawEvent:
    """An event as read from the stream, with its payload still encoded."""

    event_type: int = 0
    data: bytes = b""
    event_id: int = 0

    def parse_as_api_version_event(self) -> APIVersionEvent:
        document = json.loads(self.data)
        if not isinstance(document, Mapping):
            raise ValueError("event must be a JSON object")
        return APIVersionEvent(api_version=_field(document, "ApiVersion") or "")

    def parse_as_block_added_event(self) -> BlockAddedEvent:
        payload = _payload(self.data, "BlockAdded")
        return BlockAddedEvent(
            block_hash=payload.get("block_hash", ""),
            block=Block.from_dict(payload.get("block") or {}),
        )

    def parse_as_deploy_processed_event(self) -> DeployProcessedEvent:
        payload = _payload(self.data, "DeployProcessed")
        return DeployProcessedEvent(
            deploy_hash=payload.get("deploy_hash", ""),
            account=payload.get("account", ""),
            timestamp=_parse_timestamp(payload.get("timestamp")),
            ttl=payload.get("ttl", ""),
            block_hash=payload.get("block_hash", ""),
            execution_result=dict(payload.get("execution_result") or {}),
        )

    def parse_as_deploy_accepted_event(self) -> DeployAcceptedEvent:
        return DeployAcceptedEvent(deploy=dict(_payload(self.data, "DeployAccepted")))

    def parse_as_deploy_expired_event(self) -> DeployExpiredEvent:
        payload = _payload(self.data, "DeployExpired")
        return DeployExpiredEvent(deploy_hash=payload.get("deploy_hash", ""))

    def parse_as_finality_signature_event(self) -> FinalitySignatureEvent:
        payload = _payload(self.data, "FinalitySignature")
        return FinalitySignatureEvent(
            block_hash=payload.get("block_hash", ""),
            era_id=int(payload.get("era_id", 0)),
            signature=_hex_bytes(payload.get("signature")),
            public_key=payload.get("public_key", ""),
        )

    def parse_as_fault_event(self) -> FaultEvent:
        payload = _payload(self.data, "Fault")
        return FaultEvent(
            era_id=int(payload.get("era_id", 0)),
            public_key=payload.get("public_key", ""),
            timestamp=_parse_timestamp(payload.get("timestamp")),
        )

    def parse_as_step_event(self) -> StepEvent:
        payload = _payload(self.data, "Step")
        return StepEvent(
            era_id=int(payload.get("era_id", 0)),
            execution_effect=dict(payload.get("execution_effect") or {}),
            operations=list(payload.get("operations") or []),
            transform=payload.get("transform"),
        )