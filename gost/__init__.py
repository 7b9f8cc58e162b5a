"""Byte buffers, buffer pools, an LRU cache, queues, channels and synchronisation helpers."""

__version__ = "0.1.0"