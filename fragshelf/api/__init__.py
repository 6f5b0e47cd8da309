"""HTTP API: FastAPI application, routers and schemas."""
