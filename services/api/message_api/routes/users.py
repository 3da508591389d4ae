"""User endpoints.

Placeholders: every verb on /users answers 204 No Content.
"""

from fastapi import APIRouter, Response

router = APIRouter()


@router.api_route("", methods=["GET", "POST", "PUT", "DELETE"], status_code=204)
async def users_placeholder() -> Response:
    """Not implemented yet."""
    return Response(status_code=204)
