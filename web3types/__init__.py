"""Typed models for Ethereum JSON-RPC data: hashes, quantities, blocks, transactions, logs, filters and traces."""

__version__ = "0.1.0"