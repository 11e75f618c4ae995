"""Realtalk AI - Backend.

One FastAPI application serving:
- JWT auth (register / login / me / logout) backed by SQLite or Postgres.
- A Stripe checkout stub for subscriptions.
- A static dashboard page plus fixed sample data for its widgets.

Build the app with `realtalk_backend.api.server.create_app(cfg)`.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
