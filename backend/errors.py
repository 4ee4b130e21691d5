"""
Translation of planner errors into HTTP errors.

NotFound becomes 404; InvalidRecord and InvalidWindow become 400.
Pydantic validation of request bodies already answers 422.
"""

from contextlib import contextmanager

from fastapi import HTTPException

from adhd_planner.core.errors import NotFound, PlannerError


@contextmanager
def http_errors():
    """Re-raise planner errors from the enclosed block as HTTPException."""
    try:
        yield
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PlannerError as e:
        raise HTTPException(status_code=400, detail=str(e))
