"""
Xero integration: report client and report adapters.
"""

from cashlens.integrations.xero.client import XeroReportClient

__all__ = ["XeroReportClient"]
