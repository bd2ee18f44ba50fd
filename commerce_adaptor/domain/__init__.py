"""
Domain package for the Commerce Adaptor.

Contains the normalized product record and the typed commercetools payload
it is derived from.
"""
