"""rulefilter: strict value rules with a pluggable registry and CLI."""

__version__ = "0.1.0"
