"""FastAPI server exposing the FitMuse endpoints."""

import logging
import time
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, HTTPException, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from fitmuse_app.app import FitMuseApp
from fitmuse_app.logging_config import configure_logging, correlation_context, get_logger, log_event
from logic.compositor import FlatLayItem, compose_flat_lay
from logic.cropper import crop_garment
from logic.validation import (
    ClosetIngestRequest,
    CompositeImageRequest,
    CredentialsRequest,
    CropGarmentRequest,
    GenerateOutfitImageRequest,
    GenerateOutfitRequest,
    ImageRequest,
    InvalidRequestError,
    SaveOutfitRequest,
    first_error_message,
)
from tools.ai_client import AIResponseFormatError, AIServiceError
from tools.image_loader import ImageLoadError, InvalidImagePayloadError, load_inline_image
from tools.outfit_store import OutfitNotFoundError
from tools.user_store import AuthenticationError

logger = get_logger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def get_fitmuse(request: Request) -> FitMuseApp:
    """Return the process-wide FitMuseApp, building it on first use."""

    fitmuse: Optional[FitMuseApp] = getattr(request.app.state, "fitmuse", None)
    if fitmuse is None:
        fitmuse = FitMuseApp()
        request.app.state.fitmuse = fitmuse
    return fitmuse


def current_user_id(request: Request, fitmuse: FitMuseApp = Depends(get_fitmuse)) -> str:
    token = request.cookies.get(fitmuse.config.session_cookie_name)
    user_id = fitmuse.session_manager.resolve_user_id(token)
    if not user_id:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user_id


def _start_session(response: Response, fitmuse: FitMuseApp, user_id: str) -> None:
    session = fitmuse.session_manager.start_session(user_id)
    response.set_cookie(
        key=fitmuse.config.session_cookie_name,
        value=session.token,
        max_age=fitmuse.config.session_ttl_seconds,
        httponly=True,
        samesite="lax",
    )


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def _validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        return _error(400, first_error_message(exc))

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(_: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(InvalidImagePayloadError)
    async def _invalid_image(_: Request, exc: InvalidImagePayloadError) -> JSONResponse:
        return _error(400, str(exc))

    @app.exception_handler(ImageLoadError)
    async def _image_load_error(_: Request, exc: ImageLoadError) -> JSONResponse:
        return _error(400, str(exc))

    @app.exception_handler(AuthenticationError)
    async def _authentication_error(_: Request, exc: AuthenticationError) -> JSONResponse:
        return _error(401, str(exc))

    @app.exception_handler(OutfitNotFoundError)
    async def _outfit_not_found(_: Request, exc: OutfitNotFoundError) -> JSONResponse:
        return _error(404, str(exc))

    @app.exception_handler(InvalidRequestError)
    async def _invalid_request(_: Request, exc: InvalidRequestError) -> JSONResponse:
        return _error(400, str(exc))

    @app.exception_handler(AIResponseFormatError)
    async def _ai_format_error(_: Request, exc: AIResponseFormatError) -> JSONResponse:
        logger.error("AI returned an unreadable response", extra={"error": str(exc)})
        return _error(500, str(exc))

    @app.exception_handler(AIServiceError)
    async def _ai_service_error(_: Request, exc: AIServiceError) -> JSONResponse:
        logger.error("AI service call failed", extra={"error": str(exc)})
        return _error(500, str(exc))

    @app.exception_handler(Exception)
    async def _unexpected_error(_: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error", extra={"error": str(exc)})
        return _error(500, str(exc) or "Internal server error")


def create_app(fitmuse: FitMuseApp | None = None) -> FastAPI:
    """Build the FastAPI application; ``fitmuse`` is created lazily when omitted."""

    configure_logging()
    app = FastAPI(title="FitMuse", version="0.1.0")
    app.state.fitmuse = fitmuse
    _register_error_handlers(app)

    @app.middleware("http")
    async def _correlate_request(request: Request, call_next):
        with correlation_context(request.headers.get("x-correlation-id")) as correlation_id:
            start = time.perf_counter()
            response = await call_next(request)
            response.headers["X-Correlation-ID"] = correlation_id
            log_event(
                logger,
                level=logging.INFO,
                event="request_completed",
                correlation_id=correlation_id,
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
            )
            return response

    @app.get("/healthz")
    def healthcheck(fitmuse: FitMuseApp = Depends(get_fitmuse)) -> dict:
        """Lightweight readiness probe."""

        return {
            "status": "ok",
            "service": "fitmuse",
            "environment": fitmuse.config.environment or "local",
            "ai_provider": fitmuse.config.ai_provider,
            "model": fitmuse.config.model,
        }

    # Auth

    @app.post("/api/auth/signup")
    def signup(payload: CredentialsRequest, response: Response, fitmuse: FitMuseApp = Depends(get_fitmuse)) -> dict:
        user = fitmuse.user_store.create_user(payload.username, payload.password)
        _start_session(response, fitmuse, user.id)
        return user.public_dict()

    @app.post("/api/auth/login")
    def login(payload: CredentialsRequest, response: Response, fitmuse: FitMuseApp = Depends(get_fitmuse)) -> dict:
        user = fitmuse.user_store.authenticate(payload.username, payload.password)
        _start_session(response, fitmuse, user.id)
        return user.public_dict()

    @app.post("/api/auth/logout")
    def logout(request: Request, response: Response, fitmuse: FitMuseApp = Depends(get_fitmuse)) -> dict:
        fitmuse.session_manager.end_session(request.cookies.get(fitmuse.config.session_cookie_name))
        response.delete_cookie(fitmuse.config.session_cookie_name)
        return {"success": True}

    @app.get("/api/auth/me")
    def me(user_id: str = Depends(current_user_id), fitmuse: FitMuseApp = Depends(get_fitmuse)) -> dict:
        user = fitmuse.user_store.get_user(user_id)
        if user is None:
            raise HTTPException(status_code=401, detail="User not found")
        return user.public_dict()

    # Garment analysis

    @app.post("/api/analyze-clothing")
    def analyze_clothing(
        payload: ImageRequest,
        _: str = Depends(current_user_id),
        fitmuse: FitMuseApp = Depends(get_fitmuse),
    ) -> dict:
        return fitmuse.garment_analyzer.analyze(payload.image_base64).to_dict()

    @app.post("/api/detect-garments")
    def detect_garments(
        payload: ImageRequest,
        _: str = Depends(current_user_id),
        fitmuse: FitMuseApp = Depends(get_fitmuse),
    ) -> dict:
        return fitmuse.collage_detector.detect(payload.image_base64).to_dict()

    @app.post("/api/analyze-celebrity-outfit")
    def analyze_celebrity_outfit(
        payload: ImageRequest,
        _: str = Depends(current_user_id),
        fitmuse: FitMuseApp = Depends(get_fitmuse),
    ) -> dict:
        return fitmuse.inspiration_analyzer.analyze(payload.image_base64).to_dict()

    @app.post("/api/closet/ingest")
    def ingest_closet_upload(
        payload: ClosetIngestRequest,
        _: str = Depends(current_user_id),
        fitmuse: FitMuseApp = Depends(get_fitmuse),
    ) -> dict:
        return fitmuse.closet_ingestion.ingest(payload.image_base64, payload.name).to_dict()

    # Outfit generation

    @app.post("/api/generate-outfit")
    def generate_outfit(
        payload: GenerateOutfitRequest,
        _: str = Depends(current_user_id),
        fitmuse: FitMuseApp = Depends(get_fitmuse),
    ) -> dict:
        recommendation = fitmuse.outfit_selector.select(
            payload.closet_items(),
            payload.mood,
            style_vibe=payload.style_vibe,
            color_direction=payload.color_direction,
            has_sketch=payload.has_sketch,
            celebrity_inspiration=payload.inspiration(),
        )
        return recommendation.to_dict()

    @app.post("/api/generate-outfit-image")
    def generate_outfit_image(
        payload: GenerateOutfitImageRequest,
        _: str = Depends(current_user_id),
        fitmuse: FitMuseApp = Depends(get_fitmuse),
    ) -> dict:
        image_url = fitmuse.outfit_illustrator.generate(payload.closet_items(), payload.mood, payload.style_vibe)
        return {"imageUrl": image_url}

    @app.post("/api/composite-image")
    def composite_image(payload: CompositeImageRequest, _: str = Depends(current_user_id)) -> dict:
        items = [FlatLayItem(image=item.image, category=item.category) for item in payload.items]
        return {"imageUrl": compose_flat_lay(items, loader=load_inline_image)}

    @app.post("/api/crop-garment")
    def crop_garment_image(payload: CropGarmentRequest, _: str = Depends(current_user_id)) -> dict:
        return {"imageUrl": crop_garment(payload.image_base64, payload.box(), loader=load_inline_image)}

    # Reference data

    @app.get("/api/moodboards")
    def list_moodboards(fitmuse: FitMuseApp = Depends(get_fitmuse)) -> List[Dict[str, Any]]:
        return [moodboard.to_dict() for moodboard in fitmuse.reference_store.list_moodboards()]

    @app.get("/api/style-vibes")
    def list_style_vibes(fitmuse: FitMuseApp = Depends(get_fitmuse)) -> List[Dict[str, Any]]:
        return [vibe.to_dict() for vibe in fitmuse.reference_store.list_style_vibes()]

    # Saved outfits

    @app.get("/api/saved-outfits")
    def list_saved_outfits(
        user_id: str = Depends(current_user_id),
        fitmuse: FitMuseApp = Depends(get_fitmuse),
    ) -> List[Dict[str, Any]]:
        return [outfit.to_dict() for outfit in fitmuse.outfit_store.list_outfits_for_user(user_id)]

    @app.post("/api/saved-outfits")
    def save_outfit(
        payload: SaveOutfitRequest,
        user_id: str = Depends(current_user_id),
        fitmuse: FitMuseApp = Depends(get_fitmuse),
    ) -> dict:
        outfit = fitmuse.outfit_store.create_outfit(
            user_id=user_id,
            name=payload.name,
            mood=payload.mood,
            items=[item.to_saved_item() for item in payload.items],
            explanation=payload.explanation,
            style_vibe=payload.style_vibe,
            style_notes=payload.style_notes,
            composite_image=payload.composite_image,
        )
        return outfit.to_dict()

    @app.delete("/api/saved-outfits/{outfit_id}")
    def delete_saved_outfit(
        outfit_id: str,
        user_id: str = Depends(current_user_id),
        fitmuse: FitMuseApp = Depends(get_fitmuse),
    ) -> dict:
        if not fitmuse.outfit_store.delete_outfit(outfit_id, user_id):
            raise OutfitNotFoundError("Outfit not found or not authorized")
        return {"success": True}

    return app


app = create_app()


def get_app() -> FastAPI:
    """Expose the FastAPI instance for ASGI servers."""

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.api:app", host="0.0.0.0", port=8080, reload=False)
