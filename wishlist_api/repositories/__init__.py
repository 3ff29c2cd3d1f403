"""
Persistence adapters.

``json_storage`` reads/writes the JSON documents, ``json_repository`` keeps
the in-memory mirror of the persisted collections and ``working_lists`` holds
unsent drafts. Services depend on these classes rather than touching files.
"""
