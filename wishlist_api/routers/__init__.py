"""
FastAPI routers grouped by domain (auth, config, accounts, users, lists,
announcements, stats).

Each module exposes an APIRouter included by the app factory. Routers only
validate input and map service outcomes to HTTP status codes.
"""
