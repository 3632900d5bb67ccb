"""
FastAPI routers of the registry.

Each module exposes an APIRouter included by lombard.app.create_app.
"""
