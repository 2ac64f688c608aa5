"""
Metrics Module
Reduces provider reports to the canonical cash / revenue / expenses record.
"""
