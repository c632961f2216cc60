"""
Business logic for profile picture storage.

Each user has a single object at `profiles/<user_id>/profile.jpg`;
uploading again overwrites it.
"""

import logging

from shared.errors import NotFoundError, UploadError

logger = logging.getLogger(__name__)

SIGNED_URL_EXPIRY = 3600  # 1 hour


def profile_picture_key(user_id: str) -> str:
    """Storage path of a user's profile picture."""
    return f"profiles/{user_id}/profile.jpg"


class ProfilePictureService:
    """Service class for reading and writing profile pictures."""

    def __init__(self, client, storage_bucket: str):
        self.client = client
        self.storage_bucket = storage_bucket

    @property
    def bucket(self):
        return self.client.storage.from_(self.storage_bucket)

    async def get_signed_url(self, user_id: str, expires_in: int = SIGNED_URL_EXPIRY) -> str:
        """
        Get a signed retrieval URL for the user's profile picture.

        Args:
            user_id: The user's ID
            expires_in: URL validity in seconds (default: 1 hour)

        Returns:
            Signed URL

        Raises:
            NotFoundError: If the user has no picture (or it can't be signed)
        """
        path = profile_picture_key(user_id)

        try:
            result = await self.bucket.create_signed_url(path, expires_in)
        except Exception as e:
            raise NotFoundError(f"No profile picture at {path}") from e

        signed_url = result.get("signedURL") or result.get("signedUrl")
        if not signed_url:
            raise NotFoundError(f"No profile picture at {path}")
        return signed_url

    async def upload(self, user_id: str, file_data: bytes, content_type: str) -> str:
        """
        Upload (or replace) the user's profile picture.

        Args:
            user_id: The user's ID
            file_data: Image content as bytes
            content_type: MIME type of the image

        Returns:
            Storage path written

        Raises:
            UploadError: If storage rejects the upload
        """
        path = profile_picture_key(user_id)

        try:
            await self.bucket.upload(
                path,
                file_data,
                {"content-type": content_type, "upsert": "true"}
            )
        except Exception as e:
            raise UploadError(f"Failed to upload {path}: {str(e)}") from e

        logger.info(f"Uploaded profile picture for user {user_id} ({len(file_data)} bytes)")
        return path
