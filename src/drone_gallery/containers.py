"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from drone_gallery.adapters.image_client import HttpxImageClient, ImageClient
from drone_gallery.config import Settings, normalize_base_url
from drone_gallery.services.gallery import GalleryStore


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    image_client: ImageClient
    gallery_store: GalleryStore
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    image_client = HttpxImageClient.create(
        base_url=normalize_base_url(resolved_settings.api_base_url),
        timeout=resolved_settings.request_timeout,
    )
    gallery_store = GalleryStore(
        client=image_client,
        require_classification=resolved_settings.require_classification,
        fixed_location_id=resolved_settings.fixed_location_id,
    )

    async def close_resources() -> None:
        await image_client.close()

    return AppContainer(
        settings=resolved_settings,
        image_client=image_client,
        gallery_store=gallery_store,
        close_resources=close_resources,
    )
