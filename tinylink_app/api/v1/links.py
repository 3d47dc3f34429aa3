from typing import List

from fastapi import APIRouter, Depends, status

from tinylink_app.schemas.link import LinkCreate, LinkCreated, LinkRecord, OkResponse
from tinylink_app.services.link_service import LinkService
from tinylink_app.dependencies import get_link_service

router = APIRouter(prefix="/api/links", tags=["links"])


@router.post("", response_model=LinkCreated, status_code=status.HTTP_201_CREATED)
def create_link(
    link_data: LinkCreate,
    link_service: LinkService = Depends(get_link_service)
):
    """Create a short link, optionally with a chosen code"""
    return link_service.create_link(link_data.url, link_data.code)


@router.get("", response_model=List[LinkRecord])
def list_links(link_service: LinkService = Depends(get_link_service)):
    """All links, newest first"""
    return link_service.list_links()


@router.get("/{code}", response_model=LinkRecord)
def get_link(
    code: str,
    link_service: LinkService = Depends(get_link_service)
):
    return link_service.get_link(code)


@router.delete("/{code}", response_model=OkResponse)
def delete_link(
    code: str,
    link_service: LinkService = Depends(get_link_service)
):
    link_service.delete_link(code)
    return OkResponse()
