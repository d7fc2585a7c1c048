"""
HTTP API for the valuation engine.
"""
