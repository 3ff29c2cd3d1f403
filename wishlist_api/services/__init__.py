"""
Use cases for the wish list API.

``storage_service`` is the façade over persisted collections and drafts;
``auth_service`` implements login. Routers call these services instead of
touching the repositories directly.
"""
