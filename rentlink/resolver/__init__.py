"""Endpoint resolution - platform signals, priority chain, image URLs."""

from rentlink.resolver.image_urls import PLACEHOLDER_IMAGE, ImageUrlRewriter, rewrite_image_url
from rentlink.resolver.platform import NativeBridge, PlatformContext, StaticBridge
from rentlink.resolver.resolver import EndpointResolver

__all__ = [
    "PLACEHOLDER_IMAGE",
    "EndpointResolver",
    "ImageUrlRewriter",
    "NativeBridge",
    "PlatformContext",
    "StaticBridge",
    "rewrite_image_url",
]
