"""RPC request envelopes, method names and parameter builders."""

from __future__ import annotations

import contextvars
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any, Sequence

API_VERSION = "2.0"

_request_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "casper_rpc_request_id", default=None
)


@contextmanager
def request_id_context(request_id: int | str) -> Iterator[None]:
    """Use ``request_id`` for RPC requests made inside the ``with`` block."""
    token = _request_id.set(str(request_id))
    try:
        yield
    finally:
        _request_id.reset(token)


def get_request_id() -> str:
    """Return the current request id, or ``"0"`` when none is set."""
    value = _request_id.get()
    return "0" if value is None else value


class Method(str, Enum):
    """Names of the node's RPC endpoints."""

    GET_DEPLOY = "info_get_deploy"
    GET_STATE_ITEM = "state_get_item"
    QUERY_GLOBAL_STATE = "query_global_state"
    GET_DICTIONARY_ITEM = "state_get_dictionary_item"
    GET_STATE_BALANCE = "state_get_balance"
    GET_STATE_ACCOUNT = "state_get_account_info"
    GET_ERA_INFO = "chain_get_era_info_by_switch_block"
    GET_BLOCK = "chain_get_block"
    GET_BLOCK_TRANSFERS = "chain_get_block_transfers"
    GET_ERA_SUMMARY = "chain_get_era_summary"
    GET_AUCTION_INFO = "state_get_auction_info"
    GET_VALIDATOR_CHANGES = "info_get_validator_changes"
    GET_STATE_ROOT_HASH = "chain_get_state_root_hash"
    GET_STATUS = "info_get_status"
    GET_PEERS = "info_get_peers"
    PUT_DEPLOY = "account_put_deploy"


@dataclass
class RpcRequest:
    """A JSON-RPC call ready to be serialised."""

    method: Method
    params: Any = None
    version: str = API_VERSION
    id: str = "1"

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"jsonrpc": self.version}
        if self.id:
            result["id"] = self.id
        result["method"] = Method(self.method).value
        result["params"] = self.params
        return result


def default_rpc_request(method: Method, params: Any) -> RpcRequest:
    return RpcRequest(method=method, params=params, version=API_VERSION, id="1")


def _block_identifier(block_hash: str = "", height: int = 0) -> dict[str, Any]:
    identifier: dict[str, Any] = {}
    if block_hash:
        identifier["Hash"] = block_hash
    if height:
        identifier["Height"] = height
    return {"block_identifier": identifier}


def param_block_by_height(height: int) -> dict[str, Any]:
    return _block_identifier(height=height)


def param_block_by_hash(block_hash: str) -> dict[str, Any]:
    return _block_identifier(block_hash=block_hash)


def param_state_root_hash(
    state_root_hash: str, key: str, path: Sequence[str] | None = None
) -> dict[str, Any]:
    params: dict[str, Any] = {"state_root_hash": state_root_hash, "key": key}
    if path:
        params["path"] = list(path)
    return params


def param_query_global_state(
    key: str,
    path: Sequence[str] | None = None,
    state_root_hash: str | None = None,
    block_hash: str | None = None,
) -> dict[str, Any]:
    identifier: dict[str, str] = {}
    if state_root_hash:
        identifier["StateRootHash"] = state_root_hash
    if block_hash:
        identifier["BlockHash"] = block_hash
    params: dict[str, Any] = {"state_identifier": identifier, "key": key}
    if path:
        params["path"] = list(path)
    return params


def param_account_info(public_key: str, block_identifier: dict[str, Any]) -> dict[str, Any]:
    return {"public_key": public_key, **block_identifier}


def param_state_dictionary_item(state_root_hash: str, uref: str, key: str) -> dict[str, Any]:
    return {
        "state_root_hash": state_root_hash,
        "dictionary_identifier": {
            "URef": {
                "dictionary_item_key": key,
                "seed_uref": uref,
            },
        },
    }


def param_put_deploy(deploy: Any) -> dict[str, Any]:
    return {"deploy": deploy}