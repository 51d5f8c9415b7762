"""
Vercel serverless entry point for FastAPI application.
"""
from evstations.main import app

# Vercel requires the app to be named 'app' or 'handler'
__all__ = ["app"]
