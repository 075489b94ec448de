"""Accounts, bids, auction state and blocks as returned by a node."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping

_FRACTION = re.compile(r"^(.*?T\d{2}:\d{2}:\d{2})(\.\d+)?(.*)$")


def _parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    match = _FRACTION.match(text)
    if match and match.group(2):
        fraction = match.group(2)[1:7].ljust(6, "0")
        text = f"{match.group(1)}.{fraction}{match.group(3)}"
    return datetime.fromisoformat(text)


def _hex_bytes(value: str | None) -> bytes:
    return bytes.fromhex(value or "")


@dataclass
class AssociatedKey:
    """A key allowed to sign deploys for an account."""

    account_hash: str
    weight: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AssociatedKey:
        return cls(account_hash=data.get("account_hash", ""), weight=int(data.get("weight", 0)))


@dataclass
class ActionThresholds:
    """Thresholds that must be met for actions of a certain type."""

    deployment: int
    key_management: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ActionThresholds:
        return cls(
            deployment=int(data.get("deployment", 0)),
            key_management=int(data.get("key_management", 0)),
        )


@dataclass
class Account:
    """A user's account stored in global state."""

    account_hash: str
    named_keys: list[Any]
    main_purse: str
    associated_keys: list[AssociatedKey]
    action_thresholds: ActionThresholds

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Account:
        return cls(
            account_hash=data.get("account_hash", ""),
            named_keys=list(data.get("named_keys") or []),
            main_purse=data.get("main_purse", ""),
            associated_keys=[AssociatedKey.from_dict(k) for k in data.get("associated_keys") or []],
            action_thresholds=ActionThresholds.from_dict(data.get("action_thresholds") or {}),
        )


@dataclass
class VestingSchedule:
    """Vesting schedule of a genesis validator."""

    initial_release_timestamp_millis: int
    locked_amounts: list[int] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> VestingSchedule:
        return cls(
            initial_release_timestamp_millis=int(data.get("initial_release_timestamp_millis", 0)),
            locked_amounts=[int(a) for a in data.get("locked_amounts") or []],
        )


def _vesting(data: Mapping[str, Any]) -> VestingSchedule | None:
    raw = data.get("vesting_schedule")
    return None if raw is None else VestingSchedule.from_dict(raw)


@dataclass
class Delegator:
    """A delegator as stored in global state under a bid key."""

    bonding_purse: str
    staked_amount: int
    delegatee: str
    public_key: str
    vesting_schedule: VestingSchedule | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Delegator:
        return cls(
            bonding_purse=data.get("bonding_purse", ""),
            staked_amount=int(data.get("staked_amount", 0)),
            delegatee=data.get("delegator_public_key", ""),
            public_key=data.get("validator_public_key", ""),
            vesting_schedule=_vesting(data),
        )


@dataclass
class AuctionDelegator:
    """A delegator as listed in the auction state."""

    bonding_purse: str
    staked_amount: int
    delegatee: str
    public_key: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AuctionDelegator:
        return cls(
            bonding_purse=data.get("bonding_purse", ""),
            staked_amount=int(data.get("staked_amount", 0)),
            delegatee=data.get("delegatee", ""),
            public_key=data.get("public_key", ""),
        )


@dataclass
class Bid:
    """A bid entry stored in global state."""

    bonding_purse: str
    delegation_rate: float
    inactive: bool
    staked_amount: int
    public_key: str
    delegators: dict[str, Delegator]
    vesting_schedule: VestingSchedule | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Bid:
        return cls(
            bonding_purse=data.get("bonding_purse", ""),
            delegation_rate=float(data.get("delegation_rate", 0)),
            inactive=bool(data.get("inactive", False)),
            staked_amount=int(data.get("staked_amount", 0)),
            public_key=data.get("validator_public_key", ""),
            delegators={
                name: Delegator.from_dict(d) for name, d in (data.get("delegators") or {}).items()
            },
            vesting_schedule=_vesting(data),
        )


@dataclass
class AuctionBid:
    """A bid entry in the auction state."""

    bonding_purse: str
    delegation_rate: float
    inactive: bool
    staked_amount: int
    delegators: list[AuctionDelegator]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AuctionBid:
        return cls(
            bonding_purse=data.get("bonding_purse", ""),
            delegation_rate=float(data.get("delegation_rate", 0)),
            inactive=bool(data.get("inactive", False)),
            staked_amount=int(data.get("staked_amount", 0)),
            delegators=[AuctionDelegator.from_dict(d) for d in data.get("delegators") or []],
        )


@dataclass
class ValidatorBid:
    """A validator's public key paired with its bid."""

    public_key: str
    bid: AuctionBid

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ValidatorBid:
        return cls(
            public_key=data.get("public_key", ""),
            bid=AuctionBid.from_dict(data.get("bid") or {}),
        )


@dataclass
class EraValidators:
    """Validators and their weights for one era."""

    era_id: int
    validator_weights: list[Any]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> EraValidators:
        return cls(
            era_id=int(data.get("era_id", 0)),
            validator_weights=list(data.get("validator_weights") or []),
        )


@dataclass
class AuctionState:
    """Summary of the auction contract data."""

    bids: list[ValidatorBid]
    block_height: int
    era_validators: list[EraValidators]
    state_root_hash: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AuctionState:
        return cls(
            bids=[ValidatorBid.from_dict(b) for b in data.get("bids") or []],
            block_height=int(data.get("block_height", 0)),
            era_validators=[EraValidators.from_dict(e) for e in data.get("era_validators") or []],
            state_root_hash=data.get("state_root_hash", ""),
        )


@dataclass
class Proof:
    """A block's finality signature."""

    public_key: str
    signature: bytes

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Proof:
        return cls(
            public_key=data.get("public_key", ""),
            signature=_hex_bytes(data.get("signature")),
        )


@dataclass
class BlockBody:
    """Deploys, transfers and proposer of a block."""

    deploy_hashes: list[str]
    proposer: str
    transfer_hashes: list[str]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BlockBody:
        return cls(
            deploy_hashes=list(data.get("deploy_hashes") or []),
            proposer=data.get("proposer", ""),
            transfer_hashes=list(data.get("transfer_hashes") or []),
        )


@dataclass
class BlockHeader:
    """Header of a block."""

    body_hash: str
    era_id: int
    height: int
    parent_hash: str
    random_bit: bool
    state_root_hash: str
    timestamp: datetime | None
    protocol_version: str = ""
    accumulated_seed: str | None = None
    era_end: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BlockHeader:
        return cls(
            body_hash=data.get("body_hash", ""),
            era_id=int(data.get("era_id", 0)),
            height=int(data.get("height", 0)),
            parent_hash=data.get("parent_hash", ""),
            random_bit=bool(data.get("random_bit", False)),
            state_root_hash=data.get("state_root_hash", ""),
            timestamp=_parse_timestamp(data.get("timestamp")),
            protocol_version=data.get("protocol_version") or "",
            accumulated_seed=data.get("accumulated_seed"),
            era_end=data.get("era_end"),
        )


@dataclass
class Block:
    """A block in the network."""

    hash: str
    header: BlockHeader
    body: BlockBody
    proofs: list[Proof]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Block:
        return cls(
            hash=data.get("hash", ""),
            header=BlockHeader.from_dict(data.get("header") or {}),
            body=BlockBody.from_dict(data.get("body") or {}),
            proofs=[Proof.from_dict(p) for p in data.get("proofs") or []],
        )