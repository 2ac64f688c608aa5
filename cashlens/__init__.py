"""
Cashlens
Financial insights from QuickBooks and Xero reports.
"""

__version__ = "1.0.0"
