"""Shareable config written as a Python module."""

config = {
    "env": {"es6": True},
    "rules": {"py-rule": "warn"},
}
