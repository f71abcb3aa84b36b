"""Token resolution and bid/ask quoting."""
