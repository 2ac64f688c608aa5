"""
QuickBooks Online integration: report client and report adapters.
"""

from cashlens.integrations.quickbooks.client import QuickBooksReportClient

__all__ = ["QuickBooksReportClient"]
