"""High-level client for a node's JSON-RPC interface."""

from __future__ import annotations

from typing import Any, Mapping, Protocol, Sequence, TypeVar

from casper_sdk.rpc_errors import ResultUnmarshalError
from casper_sdk.rpc_request import (
    Method,
    RpcRequest,
    default_rpc_request,
    get_request_id,
    param_account_info,
    param_block_by_hash,
    param_block_by_height,
    param_put_deploy,
    param_query_global_state,
    param_state_dictionary_item,
    param_state_root_hash,
)
from casper_sdk.rpc_response import (
    ChainGetBlockResult,
    ChainGetBlockTransfersResult,
    ChainGetEraInfoResult,
    ChainGetEraSummaryResult,
    ChainGetStateRootHashResult,
    InfoGetDeployResult,
    InfoGetPeerResult,
    InfoGetStatusResult,
    InfoGetValidatorChangesResult,
    PutDeployResult,
    QueryGlobalStateResult,
    RpcResponse,
    StateGetAccountInfo,
    StateGetAuctionInfoResult,
    StateGetBalanceResult,
    StateGetDictionaryResult,
    StateGetItemResult,
)

_Result = TypeVar("_Result")


class Handler(Protocol):
    """Transport that delivers an RPC request and returns the node's response."""

    def process_call(self, request: RpcRequest) -> RpcResponse:
        """Send ``request`` and return the decoded response."""


class RpcClient:
    """Typed access to the node's RPC methods through a :class:`Handler`."""

    def __init__(self, handler: Handler) -> None:
        self.handler = handler

    def _call(self, method: Method, params: Any, result_type: type[_Result]) -> _Result:
        request = default_rpc_request(method, params)
        request_id = get_request_id()
        if request_id != "0":
            request.id = request_id
        response = self.handler.process_call(request)
        if response.error is not None:
            raise response.error
        result = response.result
        if not isinstance(result, Mapping):
            raise ResultUnmarshalError(
                f"expected a JSON object, got {type(result).__name__}"
            )
        try:
            return result_type.from_dict(result)  # type: ignore[attr-defined]
        except (TypeError, ValueError, KeyError, AttributeError) as exc:
            raise ResultUnmarshalError(str(exc)) from exc

    def _resolve_state_root_hash(self, state_root_hash: str | None) -> str:
        if state_root_hash is not None:
            return state_root_hash
        return self.get_state_root_hash_latest().state_root_hash

    # Informational

    def get_deploy(self, deploy_hash: str) -> InfoGetDeployResult:
        return self._call(Method.GET_DEPLOY, {"deploy_hash": deploy_hash}, InfoGetDeployResult)

    def get_state_item(
        self, state_root_hash: str | None, key: str, path: Sequence[str] | None = None
    ) -> StateGetItemResult:
        """Deprecated in favour of :meth:`query_global_state_by_state_hash`."""
        root = self._resolve_state_root_hash(state_root_hash)
        return self._call(
            Method.GET_STATE_ITEM, param_state_root_hash(root, key, path), StateGetItemResult
        )

    def query_global_state_by_block_hash(
        self, block_hash: str, key: str, path: Sequence[str] | None = None
    ) -> QueryGlobalStateResult:
        return self._call(
            Method.QUERY_GLOBAL_STATE,
            param_query_global_state(key, path, block_hash=block_hash),
            QueryGlobalStateResult,
        )

    def query_global_state_by_state_hash(
        self, state_root_hash: str | None, key: str, path: Sequence[str] | None = None
    ) -> QueryGlobalStateResult:
        root = self._resolve_state_root_hash(state_root_hash)
        return self._call(
            Method.QUERY_GLOBAL_STATE,
            param_query_global_state(key, path, state_root_hash=root),
            QueryGlobalStateResult,
        )

    def get_account_info_by_block_hash(
        self, block_hash: str, public_key: str
    ) -> StateGetAccountInfo:
        return self._call(
            Method.GET_STATE_ACCOUNT,
            param_account_info(public_key, param_block_by_hash(block_hash)),
            StateGetAccountInfo,
        )

    def get_account_info_by_block_height(
        self, block_height: int, public_key: str
    ) -> StateGetAccountInfo:
        return self._call(
            Method.GET_STATE_ACCOUNT,
            param_account_info(public_key, param_block_by_height(block_height)),
            StateGetAccountInfo,
        )

    def get_dictionary_item(
        self, state_root_hash: str | None, uref: str, key: str
    ) -> StateGetDictionaryResult:
        root = self._resolve_state_root_hash(state_root_hash)
        return self._call(
            Method.GET_DICTIONARY_ITEM,
            param_state_dictionary_item(root, uref, key),
            StateGetDictionaryResult,
        )

    def get_account_balance(
        self, state_root_hash: str | None, purse_uref: str
    ) -> StateGetBalanceResult:
        root = self._resolve_state_root_hash(state_root_hash)
        return self._call(
            Method.GET_STATE_BALANCE,
            {"state_root_hash": root, "purse_uref": purse_uref},
            StateGetBalanceResult,
        )

    def get_block_latest(self) -> ChainGetBlockResult:
        return self._call(Method.GET_BLOCK, None, ChainGetBlockResult)

    def get_block_by_hash(self, block_hash: str) -> ChainGetBlockResult:
        return self._call(Method.GET_BLOCK, param_block_by_hash(block_hash), ChainGetBlockResult)

    def get_block_by_height(self, height: int) -> ChainGetBlockResult:
        return self._call(Method.GET_BLOCK, param_block_by_height(height), ChainGetBlockResult)

    def get_block_transfers_latest(self) -> ChainGetBlockTransfersResult:
        return self._call(Method.GET_BLOCK_TRANSFERS, None, ChainGetBlockTransfersResult)

    def get_block_transfers_by_hash(self, block_hash: str) -> ChainGetBlockTransfersResult:
        return self._call(
            Method.GET_BLOCK_TRANSFERS,
            param_block_by_hash(block_hash),
            ChainGetBlockTransfersResult,
        )

    def get_block_transfers_by_height(self, height: int) -> ChainGetBlockTransfersResult:
        return self._call(
            Method.GET_BLOCK_TRANSFERS,
            param_block_by_height(height),
            ChainGetBlockTransfersResult,
        )

    def get_era_summary_latest(self) -> ChainGetEraSummaryResult:
        return self._call(Method.GET_ERA_SUMMARY, None, ChainGetEraSummaryResult)

    def get_era_summary_by_hash(self, block_hash: str) -> ChainGetEraSummaryResult:
        return self._call(
            Method.GET_ERA_SUMMARY, param_block_by_hash(block_hash), ChainGetEraSummaryResult
        )

    def get_era_summary_by_height(self, height: int) -> ChainGetEraSummaryResult:
        return self._call(
            Method.GET_ERA_SUMMARY, param_block_by_height(height), ChainGetEraSummaryResult
        )

    def get_state_root_hash_latest(self) -> ChainGetStateRootHashResult:
        return self._call(Method.GET_STATE_ROOT_HASH, None, ChainGetStateRootHashResult)

    def get_state_root_hash_by_hash(self, block_hash: str) -> ChainGetStateRootHashResult:
        return self._call(
            Method.GET_STATE_ROOT_HASH,
            param_block_by_hash(block_hash),
            ChainGetStateRootHashResult,
        )

    def get_state_root_hash_by_height(self, height: int) -> ChainGetStateRootHashResult:
        return self._call(
            Method.GET_STATE_ROOT_HASH,
            param_block_by_height(height),
            ChainGetStateRootHashResult,
        )

    def get_status(self) -> InfoGetStatusResult:
        return self._call(Method.GET_STATUS, None, InfoGetStatusResult)

    def get_peers(self) -> InfoGetPeerResult:
        return self._call(Method.GET_PEERS, None, InfoGetPeerResult)

    # Proof of stake

    def get_era_info_latest(self) -> ChainGetEraInfoResult:
        return self._call(Method.GET_ERA_INFO, None, ChainGetEraInfoResult)

    def get_era_info_by_block_height(self, height: int) -> ChainGetEraInfoResult:
        return self._call(
            Method.GET_ERA_INFO, param_block_by_height(height), ChainGetEraInfoResult
        )

    def get_era_info_by_block_hash(self, block_hash: str) -> ChainGetEraInfoResult:
        return self._call(
            Method.GET_ERA_INFO, param_block_by_hash(block_hash), ChainGetEraInfoResult
        )

    def get_auction_info_latest(self) -> StateGetAuctionInfoResult:
        return self._call(Method.GET_AUCTION_INFO, None, StateGetAuctionInfoResult)

    def get_auction_info_by_hash(self, block_hash: str) -> StateGetAuctionInfoResult:
        return self._call(
            Method.GET_AUCTION_INFO, param_block_by_hash(block_hash), StateGetAuctionInfoResult
        )

    def get_auction_info_by_height(self, height: int) -> StateGetAuctionInfoResult:
        return self._call(
            Method.GET_AUCTION_INFO, param_block_by_height(height), StateGetAuctionInfoResult
        )

    def get_validator_changes_info(self) -> InfoGetValidatorChangesResult:
        return self._call(Method.GET_VALIDATOR_CHANGES, None, InfoGetValidatorChangesResult)

    # Transactional

    def put_deploy(self, deploy: Any) -> PutDeployResult:
        return self._call(Method.PUT_DEPLOY, param_put_deploy(deploy), PutDeployResult)