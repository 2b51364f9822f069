"""Repository listing route."""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, Response

from repogate.api.dependencies import CurrentSession, Templates, get_repo_service
from repogate.core.auth.routes import redirect
from repogate.core.constants import HOME_PATH
from repogate.core.errors import UpstreamError
from repogate.modules.repos.services import RepoService


logger = structlog.get_logger()

router = APIRouter(tags=["repos"])

RepoServiceDep = Annotated[RepoService, Depends(get_repo_service)]


@router.get("/repos", response_class=HTMLResponse, name="repos", summary="Repository list")
async def list_repos(
    request: Request,
    session: CurrentSession,
    service: RepoServiceDep,
    templates: Templates,
) -> Response:
    """Render the signed-in user's repositories."""
    if not session.token:
        return redirect(HOME_PATH)

    try:
        repos = await service.get_repositories(session)
    except UpstreamError as exc:
        logger.exception("repo_fetch_failed", **exc.details)
        return redirect(HOME_PATH)

    return templates.TemplateResponse(request, "repos.html", {"repos": repos})
