"""Image Hosting Service Package."""

__version__ = "1.0.0"
__author__ = "Bharat kumar"
__description__ = (
    "Image hosting service with pluggable local and Cloudinary storage"
)

__all__ = ["handlers", "core"]
