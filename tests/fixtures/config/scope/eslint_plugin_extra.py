"""Scoped plugin ``@scope/eslint-plugin-extra``."""

rules = {"extra": {}}
