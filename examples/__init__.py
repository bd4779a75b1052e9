"""Runnable usage examples for automock.

These scripts demonstrate library usage but are not part of the core API.
"""
