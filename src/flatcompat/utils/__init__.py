"""
Shared utilities: logging setup and output serialization.
"""
