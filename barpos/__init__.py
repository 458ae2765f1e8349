"""
Bar POS - floor plan, table sessions and invoicing backend
"""

__version__ = "1.0.0"
