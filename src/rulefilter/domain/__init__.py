"""Domain layer: rules, equality, failure codes, and the rule registry.

This layer depends only on stdlib and pydantic.
It must never import from services, plugins, commands, output, or config.
"""
