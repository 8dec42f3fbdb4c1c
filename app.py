"""Application factory and entry point.

Run with:
    uvicorn app:app --reload
"""

from __future__ import annotations

from typing import Iterable

from fastapi import FastAPI

from api import router, warm
from models import BitWidth, OverflowMode

# Verified at startup; other configurations are verified on first request.
DEFAULT_WARM = ((BitWidth.INT32, OverflowMode.WRAP),)


def create_app(
    warm_configurations: Iterable[tuple[BitWidth, OverflowMode]] = DEFAULT_WARM,
) -> FastAPI:
    """Build and return the FastAPI application.

    ``warm_configurations`` are verified before the app is returned, so
    their first request does not pay the verification cost.
    """
    warm(warm_configurations)

    app = FastAPI(
        title="Bounded Algebra API",
        description=(
            "Square and cube over fixed-width signed integers. Every "
            "result stays within the requested bit width, wrapping, "
            "clamping or failing on overflow as requested."
        ),
        version="0.1.0",
    )
    app.include_router(router)
    return app


# Default app instance for `uvicorn app:app`
app = create_app()
