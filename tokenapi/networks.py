"""Network identifiers and enumerated filter values accepted by the service."""

from __future__ import annotations


class EVMChains:
    Ethereum = "mainnet"
    Base = "base"
    ArbitrumOne = "arbitrum-one"
    BSC = "bsc"
    Polygon = "polygon"
    Optimism = "optimism"
    Avalanche = "avalanche"
    Unichain = "unichain"


class SVMChains:
    Solana = "solana"


class TVMChains:
    Tron = "tron"


EVM_NETWORKS = (
    EVMChains.Ethereum,
    EVMChains.Base,
    EVMChains.ArbitrumOne,
    EVMChains.BSC,
    EVMChains.Polygon,
    EVMChains.Optimism,
    EVMChains.Avalanche,
    EVMChains.Unichain,
)
SVM_NETWORKS = (SVMChains.Solana,)
TVM_NETWORKS = (TVMChains.Tron,)

DEX_PROTOCOLS = ("uniswap_v2", "uniswap_v3")
OHLC_INTERVALS = ("1m", "5m", "15m", "1h", "4h", "1d", "1w")
ORDER_DIRECTIONS = ("ASC", "DESC")
