"""
Request-scoped access to the Application owned by the FastAPI app.
"""

from fastapi import Request

from diff_voyager.app import Application


def get_application(request: Request) -> Application:
    """Return the Application stored on app.state by create_app()."""
    return request.app.state.application
