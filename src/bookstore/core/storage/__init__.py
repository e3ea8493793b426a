from .image_store import ImageStore, ImageStoreError

__all__ = ["ImageStore", "ImageStoreError"]
