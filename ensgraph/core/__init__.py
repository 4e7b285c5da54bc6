"""
Core package: shared exception types used by the stores, clients and API layer.
"""
