"""
API module - FastAPI routers for every page and action of the front-end.

Usage:
    from jobboard.api.routes import api_router
    app.include_router(api_router)
"""
