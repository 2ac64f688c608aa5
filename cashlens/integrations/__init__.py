"""
Integrations Module
Report fetch clients and per-provider report adapters.
"""
