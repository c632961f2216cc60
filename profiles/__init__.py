# Per-user profile pictures in Supabase Storage
from .service import ProfilePictureService, profile_picture_key

__all__ = ["ProfilePictureService", "profile_picture_key"]
