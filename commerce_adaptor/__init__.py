"""
Commerce Adaptor - product data access layer for CMS-rendered pages.

Authenticates against commercetools, resolves products by SKU and
normalizes them into a stable shape for the frontend.
"""

__version__ = "0.1.0"
