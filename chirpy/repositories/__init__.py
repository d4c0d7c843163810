"""
Persistence adapters.

Today the whole dataset lives in one JSON file (json_storage.JSONStore).
Services depend on the store's methods rather than touching the file.
"""
