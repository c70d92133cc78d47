"""Welcome endpoint listing every registered API route."""

from typing import List

from fastapi import APIRouter, Request
from fastapi.routing import APIRoute

from happy_thoughts.schemas.common import EndpointInfo, Envelope

router = APIRouter(tags=["Root"])


def list_endpoints(routes) -> List[EndpointInfo]:
    """Collect path and methods of each API route, in registration order."""
    endpoints: List[EndpointInfo] = []
    for route in routes:
        if isinstance(route, APIRoute) and route.include_in_schema:
            endpoints.append(EndpointInfo(path=route.path, methods=sorted(route.methods)))
    return endpoints


@router.get(
    "/",
    response_model=Envelope[List[EndpointInfo]],
    summary="Welcome message and route list",
)
async def root(request: Request) -> Envelope[List[EndpointInfo]]:
    return Envelope(
        response=list_endpoints(request.app.routes),
        message="Welcome to the Happy Thoughts API",
    )
