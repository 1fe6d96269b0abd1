"""
Ingestion layer — raw record normalization and offline snapshot loading.

Submodules:
  normalizer       — CoinGecko market/detail records and GitHub repository
                     stats → Token / DeveloperMetrics / classifier inputs
  snapshot_loader  — JSON snapshot files → MarketSnapshot of normalized entries
"""
