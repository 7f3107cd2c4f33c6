from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

import requests
from requests.adapters import HTTPAdapter

from .auth import build_auth_headers, load_api_token
from .config import DEFAULT_BASE_URL, resolve_base_url
from .errors import APIError

logger = logging.getLogger(__name__)

REFERER = "tokenapi"


def _session(pool_maxsize: int = 1) -> requests.Session:
    # Transport-level retries stay off; PaginationExecutor owns retry policy.
    sess = requests.Session()
    adapter = HTTPAdapter(max_retries=0, pool_connections=1, pool_maxsize=pool_maxsize)
    sess.mount("http://", adapter)
    sess.mount("https://", adapter)
    return sess


def _clean_params(params: dict[str, Any] | None) -> dict[str, Any]:
    """Drop unset filters and render booleans the way the service expects."""
    cleaned: dict[str, Any] = {}
    for key, value in (params or {}).items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        cleaned[key] = value
    return cleaned


def _unwrap(res: requests.Response) -> Any:
    if res.status_code >= 400:
        try:
            detail = res.json()
        except ValueError:
            detail = res.text
        rendered = detail if isinstance(detail, str) else json.dumps(detail)
        raise APIError(f"API Error: {res.status_code} {rendered}", res.status_code, detail)
    data = res.json()
    if data is None:
        raise APIError("API Error: No data returned", res.status_code)
    return data


@dataclass
class TokenAPIClient:
    """Thin client for the Token API with VM-namespaced endpoint helpers.

    Examples:
        >>> client = TokenAPIClient.from_env()
        >>> client.evm.tokens.get_transfers(network="mainnet", limit=10)
        >>> client.svm.dexs.get_swaps(network="solana", amm_pool="...")
        >>> client.get_health()
    """

    api_token: str | None = None
    api_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0

    def __post_init__(self) -> None:
        self.api_url = self.api_url.rstrip("/")
        self.session = _session()
        self.headers = {"Accept": "application/json", "Referer": REFERER}
        self.headers.update(build_auth_headers(self.api_token))
        self.evm = EvmApi(self)
        self.svm = SvmApi(self)
        self.tvm = TvmApi(self)

    @classmethod
    def from_env(cls, base_url: str | None = None) -> TokenAPIClient:
        token = load_api_token()
        return cls(api_token=token, api_url=resolve_base_url(base_url))

    def get_client(self) -> requests.Session:
        """Underlying requests session, for calls the helpers don't cover."""
        return self.session

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """GET `path` and return the decoded JSON body.

        Raises:
            APIError: On an error status or a `null` body
            requests.RequestException: On transport failures
        """
        url = f"{self.api_url}{path}"
        query = _clean_params(params)
        logger.debug(f"GET {url} {query}")
        res = self.session.get(url, params=query, headers=self.headers, timeout=self.timeout)
        return _unwrap(res)

    def get_health(self) -> Any:
        return self.get("/v1/health")

    def get_version(self) -> Any:
        return self.get("/v1/version")

    def get_networks(self, network: str | None = None) -> Any:
        return self.get("/v1/networks", {"network": network})


TokenClient = TokenAPIClient


class _Namespace:
    def __init__(self, client: TokenAPIClient):
        self._client = client

    def _get(self, path: str, **params: Any) -> Any:
        return self._client.get(path, params)


# -- EVM ---------------------------------------------------------------------


class EvmTokens(_Namespace):
    """ERC-20 and native token endpoints on EVM networks."""

    def get_transfers(
        self,
        *,
        network: str | None = None,
        transaction_id: str | None = None,
        contract: str | None = None,
        from_address: str | None = None,
        to_address: str | None = None,
        start_time: str | None = None,
        end_time: str | None = None,
        start_block: int | None = None,
        end_block: int | None = None,
        order: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> Any:
        return self._get(
            "/v1/evm/transfers",
            network=network,
            transaction_id=transaction_id,
            contract=contract,
            from_address=from_address,
            to_address=to_address,
            start_time=start_time,
            end_time=end_time,
            start_block=start_block,
            end_block=end_block,
            order=order,
            page=page,
            limit=limit,
        )

    def get_native_transfers(
        self,
        *,
        network: str | None = None,
        transaction_id: str | None = None,
        from_address: str | None = None,
        to_address: str | None = None,
        start_time: str | None = None,
        end_time: str | None = None,
        start_block: int | None = None,
        end_block: int | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> Any:
        return self._get(
            "/v1/evm/transfers/native",
            network=network,
            transaction_id=transaction_id,
            from_address=from_address,
            to_address=to_address,
            start_time=start_time,
            end_time=end_time,
            start_block=start_block,
            end_block=end_block,
            page=page,
            limit=limit,
        )

    def get_tokens(
        self,
        *,
        network: str | None = None,
        contract: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> Any:
        return self._get(
            "/v1/evm/tokens", network=network, contract=contract, page=page, limit=limit
        )

    get_token_metadata = get_tokens

    def get_native_token_metadata(self, *, network: str | None = None) -> Any:
        return self._get("/v1/evm/tokens/native", network=network)

    def get_balances(
        self,
        *,
        address: str,
        network: str | None = None,
        contract: str | None = None,
        include_null_balances: bool | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> Any:
        return self._get(
            "/v1/evm/balances",
            network=network,
            address=address,
            contract=contract,
            include_null_balances=include_null_balances,
            page=page,
            limit=limit,
        )

    def get_native_balances(
        self,
        *,
        address: str,
        network: str | None = None,
        include_null_balances: bool | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> Any:
        return self._get(
            "/v1/evm/balances/native",
            network=network,
            address=address,
            include_null_balances=include_null_balances,
            page=page,
            limit=limit,
        )

    def get_historical_balances(
        self,
        *,
        address: str,
        network: str | None = None,
        contract: str | None = None,
        interval: str | None = None,
        start_time: str | None = None,
        end_time: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> Any:
        return self._get(
            "/v1/evm/balances/historical",
            network=network,
            address=address,
            contract=contract,
            interval=interval,
            start_time=start_time,
            end_time=end_time,
            page=page,
            limit=limit,
        )

    def get_historical_native_balances(
        self,
        *,
        address: str,
        network: str | None = None,
        interval: str | None = None,
        start_time: str | None = None,
        end_time: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> Any:
        return self._get(
            "/v1/evm/balances/historical/native",
            network=network,
            address=address,
            interval=interval,
            start_time=start_time,
            end_time=end_time,
            page=page,
            limit=limit,
        )

    def get_holders(
        self,
        *,
        contract: str,
        network: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> Any:
        return self._get(
            "/v1/evm/holders", network=network, contract=contract, page=page, limit=limit
        )

    def get_native_holders(
        self, *, network: str | None = None, page: int | None = None, limit: int | None = None
    ) -> Any:
        return self._get("/v1/evm/holders/native", network=network, page=page, limit=limit)


class EvmDexs(_Namespace):
    """Uniswap-style DEX endpoints on EVM networks."""

    def get_swaps(
        self,
        *,
        network: str | None = None,
        transaction_id: str | None = None,
        pool: str | None = None,
        caller: str | None = None,
        sender: str | None = None,
        recipient: str | None = None,
        protocol: str | None = None,
        start_time: str | None = None,
        end_time: str | None = None,
        start_block: int | None = None,
        end_block: int | None = None,
        order: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> Any:
        return self._get(
            "/v1/evm/swaps",
            network=network,
            transaction_id=transaction_id,
            pool=pool,
            caller=caller,
            sender=sender,
            recipient=recipient,
            protocol=protocol,
            start_time=start_time,
            end_time=end_time,
            start_block=start_block,
            end_block=end_block,
            order=order,
            page=page,
            limit=limit,
        )

    def get_pools(
        self,
        *,
        network: str | None = None,
        pool: str | None = None,
        token0: str | None = None,
        token1: str | None = None,
        protocol: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> Any:
        return self._get(
            "/v1/evm/pools",
            network=network,
            pool=pool,
            token0=token0,
            token1=token1,
            protocol=protocol,
            page=page,
            limit=limit,
        )

    def get_dexes(self, *, network: str | None = None) -> Any:
        return self._get("/v1/evm/dexes", network=network)

    def get_pool_ohlc(
        self,
        *,
        pool: str,
        network: str | None = None,
        interval: str | None = None,
        start_time: str | None = None,
        end_time: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> Any:
        return self._get(
            "/v1/evm/pools/ohlc",
            network=network,
            pool=pool,
            interval=interval,
            start_time=start_time,
            end_time=end_time,
            page=page,
            limit=limit,
        )


class EvmNfts(_Namespace):
    """ERC-721 / ERC-1155 endpoints on EVM networks."""

    def get_collections(
        self,
        *,
        contract: str,
        network: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> Any:
        return self._get(
            "/v1/evm/nft/collections", network=network, contract=contract, page=page, limit=limit
        )

    def get_holders(
        self,
        *,
        contract: str,
        network: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> Any:
        return self._get(
            "/v1/evm/nft/holders", network=network, contract=contract, page=page, limit=limit
        )

    def get_items(
        self,
        *,
        contract: str,
        network: str | None = None,
        token_id: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> Any:
        return self._get(
            "/v1/evm/nft/items",
            network=network,
            contract=contract,
            token_id=token_id,
            page=page,
            limit=limit,
        )

    def get_ownerships(
        self,
        *,
        address: str,
        network: str | None = None,
        contract: str | None = None,
        token_standard: str | None = None,
        include_null_balances: bool | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> Any:
        return self._get(
            "/v1/evm/nft/ownerships",
            network=network,
            address=address,
            contract=contract,
            token_standard=token_standard,
            include_null_balances=include_null_balances,
            page=page,
            limit=limit,
        )

    def get_sales(
        self,
        *,
        network: str | None = None,
        contract: str | None = None,
        token_id: str | None = None,
        buyer: str | None = None,
        seller: str | None = None,
        start_time: str | None = None,
        end_time: str | None = None,
        start_block: int | None = None,
        end_block: int | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> Any:
        return self._get(
            "/v1/evm/nft/sales",
            network=network,
            contract=contract,
            token_id=token_id,
            buyer=buyer,
            seller=seller,
            start_time=start_time,
            end_time=end_time,
            start_block=start_block,
            end_block=end_block,
            page=page,
            limit=limit,
        )

    def get_transfers(
        self,
        *,
        network: str | None = None,
        transaction_id: str | None = None,
        contract: str | None = None,
        token_id: str | None = None,
        type: str | None = None,
        address: str | None = None,
        from_address: str | None = None,
        to_address: str | None = None,
        start_time: str | None = None,
        end_time: str | None = None,
        start_block: int | None = None,
        end_block: int | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> Any:
        return self._get(
            "/v1/evm/nft/transfers",
            network=network,
            transaction_id=transaction_id,
            contract=contract,
            token_id=token_id,
            type=type,
            address=address,
            from_address=from_address,
            to_address=to_address,
            start_time=start_time,
            end_time=end_time,
            start_block=start_block,
            end_block=end_block,
            page=page,
            limit=limit,
        )


class EvmApi:
    def __init__(self, client: TokenAPIClient):
        self.tokens = EvmTokens(client)
        self.dexs = EvmDexs(client)
        self.nfts = EvmNfts(client)


# -- SVM ---------------------------------------------------------------------


class SvmTokens(_Namespace):
    """SPL token endpoints on Solana."""

    def get_transfers(
        self,
        *,
        network: str | None = None,
        signature: str | None = None,
        mint: str | None = None,
        from_address: str | None = None,
        to_address: str | None = None,
        from_owner: str | None = None,
        to_owner: str | None = None,
        start_time: str | None = None,
        end_time: str | None = None,
        start_block: int | None = None,
        end_block: int | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> Any:
        return self._get(
            "/v1/svm/transfers",
            network=network,
            signature=signature,
            mint=mint,
            from_address=from_address,
            to_address=to_address,
            from_owner=from_owner,
            to_owner=to_owner,
            start_time=start_time,
            end_time=end_time,
            start_block=start_block,
            end_block=end_block,
            page=page,
            limit=limit,
        )

    def get_tokens(
        self,
        *,
        mint: str | None = None,
        network: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> Any:
        return self._get("/v1/svm/tokens", network=network, mint=mint, page=page, limit=limit)

    get_token_metadata = get_tokens

    def get_balances(
        self,
        *,
        owner: str,
        network: str | None = None,
        mint: str | None = None,
        include_null_balances: bool | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> Any:
        return self._get(
            "/v1/svm/balances",
            network=network,
            owner=owner,
            mint=mint,
            include_null_balances=include_null_balances,
            page=page,
            limit=limit,
        )

    def get_native_balances(
        self,
        *,
        address: str,
        network: str | None = None,
        include_null_balances: bool | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> Any:
        return self._get(
            "/v1/svm/balances/native",
            network=network,
            address=address,
            include_null_balances=include_null_balances,
            page=page,
            limit=limit,
        )

    def get_holders(
        self,
        *,
        mint: str,
        network: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> Any:
        return self._get("/v1/svm/holders", network=network, mint=mint, page=page, limit=limit)

    def get_account_owner(
        self,
        *,
        account: str,
        network: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> Any:
        return self._get(
            "/v1/svm/owner", network=network, account=account, page=page, limit=limit
        )


class SvmDexs(_Namespace):
    """Raydium/Orca/Jupiter-style DEX endpoints on Solana."""

    def get_swaps(
        self,
        *,
        network: str | None = None,
        signature: str | None = None,
        amm: str | None = None,
        amm_pool: str | None = None,
        user: str | None = None,
        input_mint: str | None = None,
        output_mint: str | None = None,
        program_id: str | None = None,
        start_time: str | None = None,
        end_time: str | None = None,
        start_block: int | None = None,
        end_block: int | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> Any:
        return self._get(
            "/v1/svm/swaps",
            network=network,
            signature=signature,
            amm=amm,
            amm_pool=amm_pool,
            user=user,
            input_mint=input_mint,
            output_mint=output_mint,
            program_id=program_id,
            start_time=start_time,
            end_time=end_time,
            start_block=start_block,
            end_block=end_block,
            page=page,
            limit=limit,
        )

    def get_pools(
        self,
        *,
        network: str | None = None,
        amm_pool: str | None = None,
        base_mint: str | None = None,
        quote_mint: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> Any:
        return self._get(
            "/v1/svm/pools",
            network=network,
            amm_pool=amm_pool,
            base_mint=base_mint,
            quote_mint=quote_mint,
            page=page,
            limit=limit,
        )

    def get_dexes(self, *, network: str | None = None) -> Any:
        return self._get("/v1/svm/dexes", network=network)

    def get_pool_ohlc(
        self,
        *,
        amm_pool: str,
        network: str | None = None,
        interval: str | None = None,
        start_time: str | None = None,
        end_time: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> Any:
        return self._get(
            "/v1/svm/pools/ohlc",
            network=network,
            amm_pool=amm_pool,
            interval=interval,
            start_time=start_time,
            end_time=end_time,
            page=page,
            limit=limit,
        )


class SvmNfts(_Namespace):
    """Placeholder; the service exposes no Solana NFT endpoints yet."""


class SvmApi:
    def __init__(self, client: TokenAPIClient):
        self.tokens = SvmTokens(client)
        self.dexs = SvmDexs(client)
        self.nfts = SvmNfts(client)


# -- TVM ---------------------------------------------------------------------


class TvmTokens(_Namespace):
    """TRC-20 and native TRX endpoints on Tron."""

    def get_transfers(
        self,
        *,
        network: str | None = None,
        transaction_id: str | None = None,
        contract: str | None = None,
        from_address: str | None = None,
        to_address: str | None = None,
        start_time: str | None = None,
        end_time: str | None = None,
        start_block: int | None = None,
        end_block: int | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> Any:
        return self._get(
            "/v1/tvm/transfers",
            network=network,
            transaction_id=transaction_id,
            contract=contract,
            from_address=from_address,
            to_address=to_address,
            start_time=start_time,
            end_time=end_time,
            start_block=start_block,
            end_block=end_block,
            page=page,
            limit=limit,
        )

    def get_native_transfers(
        self,
        *,
        network: str | None = None,
        transaction_id: str | None = None,
        from_address: str | None = None,
        to_address: str | None = None,
        start_time: str | None = None,
        end_time: str | None = None,
        start_block: int | None = None,
        end_block: int | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> Any:
        return self._get(
            "/v1/tvm/transfers/native",
            network=network,
            transaction_id=transaction_id,
            from_address=from_address,
            to_address=to_address,
            start_time=start_time,
            end_time=end_time,
            start_block=start_block,
            end_block=end_block,
            page=page,
            limit=limit,
        )

    def get_tokens(
        self,
        *,
        contract: str | None = None,
        network: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> Any:
        return self._get(
            "/v1/tvm/tokens", network=network, contract=contract, page=page, limit=limit
        )

    get_token_metadata = get_tokens

    def get_native_token_metadata(self, *, network: str | None = None) -> Any:
        return self._get("/v1/tvm/tokens/native", network=network)


class TvmDexs(_Namespace):
    """SunSwap-style DEX endpoints on Tron."""

    def get_swaps(
        self,
        *,
        network: str | None = None,
        transaction_id: str | None = None,
        pool: str | None = None,
        caller: str | None = None,
        sender: str | None = None,
        recipient: str | None = None,
        start_time: str | None = None,
        end_time: str | None = None,
        start_block: int | None = None,
        end_block: int | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> Any:
        return self._get(
            "/v1/tvm/swaps",
            network=network,
            transaction_id=transaction_id,
            pool=pool,
            caller=caller,
            sender=sender,
            recipient=recipient,
            start_time=start_time,
            end_time=end_time,
            start_block=start_block,
            end_block=end_block,
            page=page,
            limit=limit,
        )

    def get_pools(
        self,
        *,
        network: str | None = None,
        pool: str | None = None,
        factory: str | None = None,
        token: str | None = None,
        protocol: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> Any:
        return self._get(
            "/v1/tvm/pools",
            network=network,
            pool=pool,
            factory=factory,
            token=token,
            protocol=protocol,
            page=page,
            limit=limit,
        )

    def get_dexes(self, *, network: str | None = None) -> Any:
        return self._get("/v1/tvm/dexes", network=network)

    def get_pool_ohlc(
        self,
        *,
        pool: str,
        network: str | None = None,
        interval: str | None = None,
        start_time: str | None = None,
        end_time: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> Any:
        return self._get(
            "/v1/tvm/pools/ohlc",
            network=network,
            pool=pool,
            interval=interval,
            start_time=start_time,
            end_time=end_time,
            page=page,
            limit=limit,
        )


class TvmNfts(_Namespace):
    """Placeholder; the service exposes no Tron NFT endpoints yet."""


class TvmApi:
    def __init__(self, client: TokenAPIClient):
        self.tokens = TvmTokens(client)
        self.dexs = TvmDexs(client)
        self.nfts = TvmNfts(client)
