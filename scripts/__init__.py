"""
Operational scripts for the platform services.
Version: 1.0.0
"""

# Package version following semantic versioning
__version__ = "1.0.0"

__all__ = ["__version__"]
