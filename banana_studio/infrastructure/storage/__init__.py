"""Объектные хранилища для исходных изображений."""

from banana_studio.infrastructure.storage.supabase import SupabaseStorage

__all__ = ["SupabaseStorage"]
