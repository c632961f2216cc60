"""
Local preview handles for files picked by the user.

A preview is an in-memory `blob:` URL pointing at the file bytes, created
without any network call. Handles must be revoked once they are no longer
shown.
"""

import base64
import logging
import uuid
from typing import Dict, Optional, Tuple

logger = logging.getLogger(__name__)


class PreviewRegistry:
    """Issues and revokes preview URLs."""

    def __init__(self):
        self._objects: Dict[str, Tuple[bytes, str]] = {}

    def create(self, data: bytes, content_type: str) -> str:
        url = f"blob:{uuid.uuid4()}"
        self._objects[url] = (data, content_type)
        return url

    def revoke(self, url: Optional[str]) -> None:
        """Release a preview. Unknown or None URLs are ignored."""
        if url and self._objects.pop(url, None) is not None:
            logger.debug(f"Revoked preview {url}")

    def resolve(self, url: str) -> Optional[Tuple[bytes, str]]:
        """Return (data, content_type) for a live preview URL."""
        return self._objects.get(url)

    def as_data_url(self, url: str) -> Optional[str]:
        """Render a live preview as a `data:` URL for embedding."""
        entry = self._objects.get(url)
        if entry is None:
            return None
        data, content_type = entry
        return f"data:{content_type};base64,{base64.b64encode(data).decode('ascii')}"

    @property
    def live_count(self) -> int:
        return len(self._objects)
