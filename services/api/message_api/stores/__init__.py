"""Data stores for persistence and locking.

Stores handle:
- SQL database: sessions, generic document repositories, auditing
- Locks: per-key serialization (in-process or Redis)

No business logic in stores - that belongs in services.
"""
