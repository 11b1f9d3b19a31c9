"""Football Trader: pasted-stats parsing, derived metrics and match profiles."""
