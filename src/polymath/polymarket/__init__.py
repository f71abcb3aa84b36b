"""Polymarket upstreams: Gamma (event metadata) and CLOB (order book)."""
