# catalog/api/deps.py
from typing import Annotated, Optional
from fastapi import Depends, Header, Request
from catalog.core.context import CatalogContext

# Dependency for injecting the process-scoped catalog context into endpoints
def get_context(request: Request) -> CatalogContext:
    return request.app.state.catalog

ContextDep = Annotated[CatalogContext, Depends(get_context)]

# Admin gate: runs before the handler body, so a denied call has no side effects
def require_admin(
    ctx: ContextDep,
    password: Optional[str] = Header(default=None),
) -> None:
    ctx.guard.require(password)

AdminDep = Depends(require_admin)
