"""Utility package for logo atlas maker."""

from . import image_loader, image_operations, validation

__all__ = ["image_loader", "image_operations", "validation"]
