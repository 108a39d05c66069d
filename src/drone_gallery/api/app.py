"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, File, HTTPException, Request, Response, UploadFile, status

from drone_gallery.api.models import (
    DeleteRequest,
    FieldSelection,
    GalleryView,
    PhotoView,
    ProcessOption,
    UploadView,
)
from drone_gallery.api.page import router as page_router
from drone_gallery.app_logging import configure_logging
from drone_gallery.containers import AppContainer
from drone_gallery.domain.photos import LOCATION_IDS, Photo, ProcessStage
from drone_gallery.services.gallery import GalleryStore, UploadBlockedError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            await app.state.container.gallery_store.load()
        except Exception:
            logger.exception("Failed to load the gallery at startup")
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(page_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/state")
    async def state(request: Request) -> GalleryView:
        """Return the current view state."""
        return _snapshot(_store(request))

    @app.post("/gallery/reload")
    async def reload_gallery(request: Request) -> GalleryView:
        """Re-fetch the photo list from the image service."""
        store = _store(request)
        await store.load()
        return _snapshot(store)

    @app.post("/upload/file")
    async def select_file(
        request: Request, file: UploadFile | None = File(default=None)
    ) -> GalleryView:
        """Remember the chosen file without uploading it."""
        store = _store(request)
        if file is None or not file.filename:
            store.select_file(None, b"")
        else:
            content = await file.read()
            store.select_file(file.filename, content, file.content_type)
        return _snapshot(store)

    @app.post("/upload/fields")
    async def select_fields(selection: FieldSelection, request: Request) -> GalleryView:
        """Record the process and location chosen for the next upload."""
        store = _store(request)
        try:
            if "process_id" in selection.model_fields_set:
                store.select_process(selection.process_id)
            if "location_id" in selection.model_fields_set:
                store.select_location(selection.location_id)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return _snapshot(store)

    @app.post("/upload")
    async def upload(request: Request) -> GalleryView:
        """Submit the pending file to the image service."""
        store = _store(request)
        try:
            await store.upload()
        except UploadBlockedError as exc:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT, detail=str(exc)
            ) from exc
        return _snapshot(store)

    @app.post("/photos/{photo_id}/delete")
    async def delete_photo(
        photo_id: int, payload: DeleteRequest, request: Request
    ) -> GalleryView:
        """Delete a photo once the browser prompt was accepted."""
        store = _store(request)
        await store.delete(photo_id, confirm=lambda _prompt: payload.confirmed)
        return _snapshot(store)

    @app.post("/viewer/close")
    async def close_viewer(request: Request) -> GalleryView:
        store = _store(request)
        store.close_viewer()
        return _snapshot(store)

    @app.post("/viewer/backdrop")
    async def click_backdrop(request: Request) -> GalleryView:
        store = _store(request)
        store.click_backdrop()
        return _snapshot(store)

    @app.post("/viewer/image")
    async def click_viewer_image(request: Request) -> GalleryView:
        store = _store(request)
        store.click_viewer_image()
        return _snapshot(store)

    @app.post("/viewer/{photo_id}")
    async def open_viewer(photo_id: int, request: Request) -> GalleryView:
        """Show a single photo in the detail overlay."""
        store = _store(request)
        store.open_viewer(photo_id)
        return _snapshot(store)

    @app.get("/images/{photo_id}")
    async def image_bytes(photo_id: int, request: Request) -> Response:
        """Relay a stored image from the image service."""
        state_container: AppContainer = request.app.state.container
        try:
            content, content_type = (
                await state_container.image_client.get_image_bytes(photo_id)
            )
        except httpx.HTTPError as exc:
            logger.exception("Failed to fetch image", extra={"photo_id": photo_id})
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY) from exc
        return Response(content=content, media_type=content_type or "image/jpeg")

    return app


def _store(request: Request) -> GalleryStore:
    state_container: AppContainer = request.app.state.container
    return state_container.gallery_store


def _photo_view(photo: Photo) -> PhotoView:
    return PhotoView(
        id=photo.id,
        original_filename=photo.original_filename,
        process_id=photo.process_id.value if photo.process_id else None,
        location_id=photo.location_id,
        image_url=f"/images/{photo.id}",
    )


def _snapshot(store: GalleryStore) -> GalleryView:
    """Build the page's view of the store."""
    selected = store.selected_image
    pending = store.pending_upload
    return GalleryView(
        photos=[_photo_view(photo) for photo in store.photos],
        selected_image=_photo_view(selected) if selected else None,
        status_message=store.status_message,
        upload=UploadView(
            state=store.upload_state.value,
            filename=pending.filename if pending else None,
            process_id=store.process_id.value if store.process_id else None,
            location_id=store.location_id,
            can_upload=store.can_upload,
            preview_url=store.preview_url,
            require_classification=store.require_classification,
        ),
        processes=[
            ProcessOption(id=stage.value, label=stage.label) for stage in ProcessStage
        ],
        locations=list(LOCATION_IDS),
    )
