"""
Adapters package for the Commerce Adaptor.

Interfaces and platform implementations for talking to e-commerce APIs.
"""
