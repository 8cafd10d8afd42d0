"""Judge.me reviews API client package."""

from storefront_gateway.clients.judgeme.client import JudgeMeClient
from storefront_gateway.clients.judgeme.models import (
    JudgeMePicture,
    JudgeMePictureUrls,
    JudgeMeReview,
    JudgeMeReviewer,
)


__all__ = [
    "JudgeMeClient",
    "JudgeMePicture",
    "JudgeMePictureUrls",
    "JudgeMeReview",
    "JudgeMeReviewer",
]
