"""Client library for Casper network nodes: currency conversion, JSON-RPC queries and event streams."""

__version__ = "0.1.0"