"""
Poultry reports: egg-production forecasting and laying-efficiency KPIs
for layer flocks, computed from farm record snapshots.
"""

__version__ = "1.0.0"
