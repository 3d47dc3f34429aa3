from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse

from tinylink_app.services.link_service import LinkService
from tinylink_app.dependencies import get_link_service

router = APIRouter(tags=["redirect"])


@router.get("/{code}")
def redirect_to_url(
    code: str,
    link_service: LinkService = Depends(get_link_service)
):
    """
    Redirect to the stored URL and count the click.
    
    The lookup and the increment are a single statement, so the click is
    recorded before the client is sent on. Unknown and reserved codes
    (api, healthz) raise NotFoundError, which becomes a 404.
    """
    url = link_service.resolve_and_count(code)
    return RedirectResponse(url=url, status_code=status.HTTP_302_FOUND)
