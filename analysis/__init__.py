"""
Portfolio Analysis Engine

Turns per-company financial time series into:
- Risk metrics (volatility, correlation, diversification, concentration)
- Weighted performance metrics (ROE, ROA, growth, risk-adjusted return)
- Peer benchmarking per company
- Per-metric trend analysis with linear forecasts
"""

__version__ = "0.1.0"
