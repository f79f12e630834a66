"""FastAPI application factory for the kiosk."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import BackgroundTasks, FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse, Response

from aibooth.api.models import (
    ChannelRequest,
    ContactRequest,
    EmailDomainRequest,
    OutcomeView,
    SessionView,
    SubmitRequest,
)
from aibooth.app_logging import configure_logging
from aibooth.containers import AppContainer
from aibooth.domain.branding import EventBranding
from aibooth.domain.delivery import EMAIL_DOMAIN_SUGGESTIONS
from aibooth.domain.errors import SessionStateError, ValidationError
from aibooth.domain.session import Delivered, Failed, PipelineOutcome
from aibooth.services.capture import CountdownCaptureController
from aibooth.services.qr import render_share_qr


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(SessionStateError)
    async def session_state_error(
        request: Request, exc: SessionStateError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)}
        )

    @app.exception_handler(ValidationError)
    async def contact_validation_error(
        request: Request, exc: ValidationError
    ) -> JSONResponse:
        controller = _controller(request)
        return JSONResponse(
            status_code=422,
            content={
                "detail": str(exc),
                "session": _session_view(controller).model_dump(),
            },
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/session")
    async def get_session(request: Request) -> SessionView:
        """Return the current session state."""
        return _session_view(_controller(request))

    @app.post("/session/countdown")
    async def start_countdown(
        request: Request, background_tasks: BackgroundTasks
    ) -> SessionView:
        """Start the capture countdown if the kiosk is idle."""
        controller = _controller(request)
        if not controller.start_countdown():
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Capture is disabled until the current session ends.",
            )
        background_tasks.add_task(controller.run_countdown)
        return _session_view(controller)

    @app.post("/session/retake")
    async def retake(request: Request) -> SessionView:
        controller = _controller(request)
        controller.retake()
        return _session_view(controller)

    @app.post("/session/continue")
    async def open_channel_choice(request: Request) -> SessionView:
        controller = _controller(request)
        controller.open_channel_choice()
        return _session_view(controller)

    @app.post("/session/cancel-choice")
    async def close_channel_choice(request: Request) -> SessionView:
        controller = _controller(request)
        controller.close_channel_choice()
        return _session_view(controller)

    @app.post("/session/channel")
    async def select_channel(payload: ChannelRequest, request: Request) -> SessionView:
        controller = _controller(request)
        controller.select_channel(payload.channel)
        return _session_view(controller)

    @app.post("/session/contact")
    async def enter_contact(payload: ContactRequest, request: Request) -> SessionView:
        controller = _controller(request)
        controller.enter_contact(payload.contact)
        return _session_view(controller)

    @app.get("/session/email-domains")
    async def email_domains() -> list[str]:
        """List the quick-pick domains offered under the email field."""
        return list(EMAIL_DOMAIN_SUGGESTIONS)

    @app.post("/session/email-domain")
    async def apply_email_domain(
        payload: EmailDomainRequest, request: Request
    ) -> SessionView:
        controller = _controller(request)
        controller.apply_email_domain(payload.domain)
        return _session_view(controller)

    @app.post("/session/submit")
    async def submit(payload: SubmitRequest, request: Request) -> OutcomeView:
        """Validate the delivery choice and run upload and registration."""
        state_container: AppContainer = request.app.state.container
        controller = state_container.capture_controller
        outcome = await controller.submit(payload.channel, payload.contact)
        if isinstance(outcome, Failed):
            logger.error(
                "Session failed",
                extra={
                    "failure_kind": outcome.kind,
                    "artifact_id": outcome.artifact_id,
                },
            )
        return _outcome_view(state_container, outcome)

    @app.post("/session/reset")
    async def reset(request: Request) -> SessionView:
        controller = _controller(request)
        controller.reset()
        return _session_view(controller)

    @app.put("/session/event/{event_id}")
    async def bind_event(event_id: str, request: Request) -> SessionView:
        """Point the kiosk at another event."""
        controller = _controller(request)
        controller.bind_event(event_id)
        return _session_view(controller)

    @app.get("/session/preview.jpg")
    async def preview(request: Request) -> Response:
        """Return the captured photo for the preview screen."""
        image = _controller(request).session.captured_image
        if image is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return Response(content=image, media_type="image/jpeg")

    @app.get("/session/qr.png")
    async def share_qr(request: Request) -> Response:
        """Return the share link as a QR code once delivered."""
        share_url = _controller(request).session.share_url
        if not share_url:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return Response(content=render_share_qr(share_url), media_type="image/png")

    @app.get("/branding")
    async def branding(request: Request) -> EventBranding:
        """Return logo overlay settings for the bound event."""
        state_container: AppContainer = request.app.state.container
        event_id = state_container.capture_controller.event_id
        return await state_container.branding_service.get_branding(event_id)

    return app


def _controller(request: Request) -> CountdownCaptureController:
    state_container: AppContainer = request.app.state.container
    return state_container.capture_controller


def _session_view(controller: CountdownCaptureController) -> SessionView:
    return SessionView.from_snapshot(controller.snapshot())


def _outcome_view(
    state_container: AppContainer, outcome: PipelineOutcome
) -> OutcomeView:
    session = _session_view(state_container.capture_controller)
    if isinstance(outcome, Delivered):
        return OutcomeView(
            status="delivered",
            share_url=outcome.share_url,
            artifact_id=outcome.artifact_id,
            session=session,
        )
    return OutcomeView(
        status="failed",
        artifact_id=outcome.artifact_id,
        failure_kind=outcome.kind.value,
        message=_format_failure(state_container, outcome),
        session=session,
    )


def _format_failure(state_container: AppContainer, outcome: Failed) -> str:
    """Return a user-facing failure message with local debug info."""
    if state_container.settings.environment == "local":
        detail = f"{outcome.kind.value}"
        if outcome.upload_location:
            detail = f"{detail}, stored at {outcome.upload_location}"
        return f"{outcome.message} (debug: {detail})"
    return outcome.message
