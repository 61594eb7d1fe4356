"""Application factory and entry point.

Run with:
    uvicorn app:app --reload
"""

from __future__ import annotations

from fastapi import FastAPI

from api import router, set_limits
from limits import DEFAULT_LIMITS, Limits


def create_app(limits: Limits | None = None) -> FastAPI:
    """Build and return the FastAPI application.

    Every request is answered within ``limits``; the default is the
    library's ``DEFAULT_LIMITS``.
    """
    if limits is None:
        limits = DEFAULT_LIMITS

    set_limits(limits)

    app = FastAPI(
        title="Bounded Integer Interval API",
        description=(
            "Answers questions about bounded integers from their intervals "
            "alone: the result interval of an operation, whether a fallible "
            "operation must fail, must pass or may fail, and which orderings "
            "are still possible."
        ),
        version="0.1.0",
    )
    app.include_router(router)
    return app


# Default app instance for `uvicorn app:app`
app = create_app()
