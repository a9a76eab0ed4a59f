"""HTTP transport layer - FastAPI application and routes."""
