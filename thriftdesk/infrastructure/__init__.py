"""Infrastructure adapters: database, storage, security and realtime delivery."""
