"""Result payloads returned by the node's RPC endpoints."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Mapping

from casper_sdk.entities import (
    Account,
    AuctionState,
    Block,
    BlockHeader,
    _parse_timestamp,
)
from casper_sdk.rpc_errors import RpcError


def _require_mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise TypeError(f"{what} must be a JSON object, got {type(data).__name__}")
    return data


@dataclass
class RpcResponse:
    """A JSON-RPC response: either a result or an error."""

    version: str = ""
    id: str = ""
    result: Any = None
    error: RpcError | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RpcResponse:
        data = _require_mapping(data, "rpc response")
        raw_error = data.get("error")
        error = None
        if raw_error is not None:
            raw_error = _require_mapping(raw_error, "rpc error")
            error = RpcError(int(raw_error.get("code", 0)), str(raw_error.get("message", "")))
        raw_id = data.get("id")
        return cls(
            version=data.get("jsonrpc", ""),
            id="" if raw_id is None else str(raw_id),
            result=data.get("result"),
            error=error,
        )


class ValidatorState(str, Enum):
    """Kinds of validator status change."""

    ADDED = "Added"
    REMOVED = "Removed"
    BANNED = "Banned"
    CANNOT_PROPOSE = "CannotPropose"
    SEEN_AS_FAULTY = "SeenAsFaulty"


@dataclass
class NodePeer:
    """A peer connected to the node."""

    node_id: str
    address: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> NodePeer:
        return cls(node_id=data.get("node_id", ""), address=data.get("address", ""))


def _peers(data: Mapping[str, Any]) -> list[NodePeer]:
    return [NodePeer.from_dict(p) for p in data.get("peers") or []]


@dataclass
class StateGetAuctionInfoResult:
    version: str
    auction_state: AuctionState

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> StateGetAuctionInfoResult:
        return cls(
            version=data.get("api_version", ""),
            auction_state=AuctionState.from_dict(data.get("auction_state") or {}),
        )


@dataclass
class StateGetBalanceResult:
    api_version: str
    balance_value: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> StateGetBalanceResult:
        return cls(
            api_version=data.get("api_version", ""),
            balance_value=int(data.get("balance_value", 0)),
        )


@dataclass
class StateGetAccountInfo:
    api_version: str
    account: Account

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> StateGetAccountInfo:
        return cls(
            api_version=data.get("api_version", ""),
            account=Account.from_dict(data.get("account") or {}),
        )


@dataclass
class ChainGetBlockResult:
    version: str
    block: Block

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ChainGetBlockResult:
        return cls(
            version=data.get("version", ""),
            block=Block.from_dict(data.get("block") or {}),
        )


@dataclass
class ChainGetBlockTransfersResult:
    version: str
    block_hash: str
    transfers: list[Any] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ChainGetBlockTransfersResult:
        return cls(
            version=data.get("api_version", ""),
            block_hash=data.get("block_hash", ""),
            transfers=list(data.get("transfers") or []),
        )


@dataclass
class ChainGetEraSummaryResult:
    version: str
    era_summary: dict[str, Any] | None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ChainGetEraSummaryResult:
        return cls(version=data.get("api_version", ""), era_summary=data.get("era_summary"))


@dataclass
class InfoGetDeployResult:
    api_version: str
    deploy: dict[str, Any]
    execution_results: list[Any] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> InfoGetDeployResult:
        return cls(
            api_version=data.get("api_version", ""),
            deploy=dict(data.get("deploy") or {}),
            execution_results=list(data.get("execution_results") or []),
        )


@dataclass
class ChainGetEraInfoResult:
    version: str
    era_summary: dict[str, Any] | None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ChainGetEraInfoResult:
        return cls(version=data.get("api_version", ""), era_summary=data.get("era_summary"))


@dataclass
class StateGetItemResult:
    stored_value: dict[str, Any]
    merkle_proof: Any = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> StateGetItemResult:
        return cls(
            stored_value=dict(data.get("stored_value") or {}),
            merkle_proof=data.get("merkle_proof"),
        )


@dataclass
class StateGetDictionaryResult:
    api_version: str
    dictionary_key: str
    stored_value: dict[str, Any]
    merkle_proof: Any = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> StateGetDictionaryResult:
        return cls(
            api_version=data.get("api_version", ""),
            dictionary_key=data.get("dictionary_key", ""),
            stored_value=dict(data.get("stored_value") or {}),
            merkle_proof=data.get("merkle_proof"),
        )


@dataclass
class QueryGlobalStateResult:
    api_version: str
    stored_value: dict[str, Any]
    block_header: BlockHeader | None = None
    merkle_proof: Any = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> QueryGlobalStateResult:
        raw_header = data.get("block_header")
        return cls(
            api_version=data.get("api_version", ""),
            stored_value=dict(data.get("stored_value") or {}),
            block_header=None if raw_header is None else BlockHeader.from_dict(raw_header),
            merkle_proof=data.get("merkle_proof"),
        )


@dataclass
class InfoGetPeerResult:
    api_version: str
    peers: list[NodePeer] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> InfoGetPeerResult:
        return cls(api_version=data.get("api_version", ""), peers=_peers(data))


@dataclass
class ChainGetStateRootHashResult:
    version: str
    state_root_hash: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ChainGetStateRootHashResult:
        return cls(
            version=data.get("api_version", ""),
            state_root_hash=data.get("state_root_hash", ""),
        )


@dataclass
class StatusChange:
    """A validator status change within an era."""

    era_id: int
    validator_state: ValidatorState

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> StatusChange:
        return cls(
            era_id=int(data.get("era_id", 0)),
            validator_state=ValidatorState(data.get("validator_change")),
        )


@dataclass
class ValidatorChanges:
    public_key: str
    status_changes: list[StatusChange] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ValidatorChanges:
        return cls(
            public_key=data.get("public_key", ""),
            status_changes=[StatusChange.from_dict(c) for c in data.get("status_changes") or []],
        )


@dataclass
class InfoGetValidatorChangesResult:
    api_version: str
    changes: list[ValidatorChanges] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> InfoGetValidatorChangesResult:
        return cls(
            api_version=data.get("api_version", ""),
            changes=[ValidatorChanges.from_dict(c) for c in data.get("changes") or []],
        )


@dataclass
class ActivationPoint:
    """The first era to which a protocol version applies."""

    era_id: int
    timestamp: datetime | None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ActivationPoint:
        return cls(
            era_id=int(data.get("era_id", 0)),
            timestamp=_parse_timestamp(data.get("timestamp")),
        )


@dataclass
class NodeNextUpgrade:
    """Information about the next protocol upgrade."""

    activation_point: ActivationPoint
    protocol_version: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> NodeNextUpgrade:
        return cls(
            activation_point=ActivationPoint.from_dict(data.get("activation_point") or {}),
            protocol_version=data.get("protocol_version", ""),
        )


@dataclass
class InfoGetStatusResult:
    """Current status of a node."""

    api_version: str
    build_version: str
    chainspec_name: str
    last_added_block_info: dict[str, Any] | None
    next_upgrade: NodeNextUpgrade | None
    our_public_signing_key: str
    peers: list[NodePeer]
    round_length: str
    starting_state_root_hash: str
    uptime: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> InfoGetStatusResult:
        raw_upgrade = data.get("next_upgrade")
        return cls(
            api_version=data.get("api_version", ""),
            build_version=data.get("build_version", ""),
            chainspec_name=data.get("chainspec_name", ""),
            last_added_block_info=data.get("last_added_block_info"),
            next_upgrade=None if raw_upgrade is None else NodeNextUpgrade.from_dict(raw_upgrade),
            our_public_signing_key=data.get("our_public_signing_key", ""),
            peers=_peers(data),
            round_length=data.get("round_length") or "",
            starting_state_root_hash=data.get("starting_state_root_hash", ""),
            uptime=data.get("uptime", ""),
        )


@dataclass
class PutDeployResult:
    api_version: str
    deploy_hash: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PutDeployResult:
        return cls(
            api_version=data.get("api_version", ""),
            deploy_hash=data.get("deploy_hash", ""),
        )