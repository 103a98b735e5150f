"""Acting scope dependencies: company, group and actor ids from request headers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, HTTPException, Request

from tasks_management.core.config import get_settings


@dataclass(frozen=True)
class ActingScope:
    """Company/group pair a request operates in."""

    company_id: int
    group_id: int


def _positive_int_header(request: Request, name: str) -> int:
    """Return header name as a positive int; 400 when missing or malformed."""
    value = request.headers.get(name)
    if not value:
        raise HTTPException(status_code=400, detail=f"Missing required header: {name}")
    try:
        parsed = int(value.strip())
    except ValueError:
        raise HTTPException(
            status_code=400, detail=f"Invalid header {name}: expected a positive integer"
        ) from None
    if parsed < 1:
        raise HTTPException(
            status_code=400, detail=f"Invalid header {name}: expected a positive integer"
        )
    return parsed


async def get_acting_scope(request: Request) -> ActingScope:
    """Resolve company and group ids from the configured scope headers."""
    settings = get_settings()
    return ActingScope(
        company_id=_positive_int_header(request, settings.company_header_name),
        group_id=_positive_int_header(request, settings.group_header_name),
    )


async def get_actor_id(request: Request) -> int:
    """Resolve the acting user id from the configured user header."""
    return _positive_int_header(request, get_settings().user_header_name)


ActingScopeDep = Annotated[ActingScope, Depends(get_acting_scope)]
ActorIdDep = Annotated[int, Depends(get_actor_id)]
