"""
FastAPI routers grouped by concern (auth, dashboard, records).

Each module exposes an APIRouter (or a builder for one) that the app factory
includes. Handlers call services/stores and render Jinja2 templates.
"""
