"""API Layer — FastAPI routers and global error handlers."""
