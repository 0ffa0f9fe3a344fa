"""
API Dependency Injection Module

Provides the dependencies required by FastAPI routes. Long-lived objects are
created in the application lifespan and kept on `app.state`.
"""

from typing import Annotated, Optional

from fastapi import Depends, Request

from haste.common.notifier import WebhookNotifier
from haste.services.document_service import DocumentService


def get_document_service(request: Request) -> DocumentService:
    """Get document service"""
    return request.app.state.document_service


def get_notifier(request: Request) -> Optional[WebhookNotifier]:
    """Get webhook notifier, None when notifications are disabled"""
    return getattr(request.app.state, "notifier", None)


# Dependency type aliases
DocumentServiceDep = Annotated[DocumentService, Depends(get_document_service)]
NotifierDep = Annotated[Optional[WebhookNotifier], Depends(get_notifier)]
