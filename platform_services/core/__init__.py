"""
Core package: constants, error taxonomy and FastAPI dependency providers.

Version: 1.0
"""
