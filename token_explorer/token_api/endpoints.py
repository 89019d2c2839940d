# Paths are relative to the upstream base URL and go through the proxy as ?path=...

BALANCES = "balances/evm/{address}"
HOLDERS = "holders/evm/{address}"
TOKEN_METADATA = "tokens/evm/{address}"
TRANSFERS = "transfers/evm"
OHLC_BY_CONTRACT = "ohlc/contract/evm/{address}"
OHLC_BY_POOL = "ohlc/pools/evm/{address}"
POOLS = "pools/evm"
SWAPS = "swaps/evm"
HISTORICAL_BALANCES = "historical/balances/evm/{address}"
