"""
ASGI entry point for the backend application.

Builds the application dependencies and exposes the FastAPI app, with the
API documentation endpoints disabled, as `asgi_app`.

Example usage:
    uvicorn alumni_backend.prod_runner:asgi_app --host 0.0.0.0 --port 5001
"""

from alumni_backend.utils.app_dependency_builder import AppDependencyBuilder


builder = AppDependencyBuilder()

asgi_app = builder.fast_app_factory.create_app(is_prod=True)
