"""Adapters: filesystem access, result caches and format loaders."""
