"""
Infrastructure package: authentication and error handling.
"""
