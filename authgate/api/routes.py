from typing import Any, AsyncIterator

import httpx
from fastapi import APIRouter, Body, Depends, Request
from starlette.concurrency import run_in_threadpool

from authgate.api.auth import require_api_key
from authgate.api.collaborators import CollectingNotifier, RequestNavigator
from authgate.api.normalize import normalize_login_payload
from authgate.api.schemas import FormStatusResponse, LoginRequest, LoginResponse
from authgate.client.auth_client import HttpAuthClient
from authgate.core.form import LoginForm
from authgate.observability.logging import log
from authgate.settings import settings
from authgate.store.form_repo import load_form_status, save_form_status
from authgate.store.session import SessionStore
from authgate.utils.lock import submission_lock

router = APIRouter()

LOGIN_PATHS = (
    "/api/login",   # primary
    "/login",       # form action alias
)


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(timeout=settings.AUTH_TIMEOUT_SEC) as client:
        yield client


def _build_form(http_client: httpx.AsyncClient, intent_path=None):
    session = SessionStore()
    notifier = CollectingNotifier()
    navigator = RequestNavigator(intent_path)
    form = LoginForm(
        auth=HttpAuthClient(session, client=http_client),
        session=session,
        navigator=navigator,
        notifier=notifier,
    )
    return form, session, notifier, navigator


async def _handle_login(request: Request, payload: Any, http_client: httpx.AsyncClient) -> LoginResponse:
    """Accept ANY payload shape and run one login attempt for its formId."""
    if payload is None:
        try:
            payload = await request.json()
        except ValueError:
            payload = {}
    if not isinstance(payload, dict):
        payload = {}

    req = LoginRequest.model_validate(normalize_login_payload(payload))

    async with submission_lock(req.formId) as acquired:
        if not acquired:
            log(event="login_request_in_flight", formId=req.formId)
            return LoginResponse(formId=req.formId, status="in_flight")

        form, session, notifier, navigator = _build_form(http_client, req.from_path)
        form.mount()
        form.set_phone_number(req.phoneNumber, clamp=False)
        form.set_password(req.password)
        form.set_agree(req.agree)
        try:
            state = await form.submit()
        finally:
            form.unmount()

    redirect_path = navigator.redirect.path if navigator.redirect else None
    try:
        await run_in_threadpool(save_form_status, req.formId, state, redirect_path)
    except Exception as e:
        log(event="form_status_store_failed", formId=req.formId, error=str(e)[:200])

    return LoginResponse(
        formId=req.formId,
        status=state.status,
        reason=state.reason,
        notifications=notifier.notifications,
        redirect=navigator.redirect,
        authenticated=session.is_authenticated,
    )


# ---------------------------------------------------------------------------
# POST endpoints: one login attempt per request
# ---------------------------------------------------------------------------
for _path in LOGIN_PATHS:
    @router.post(
        _path,
        response_model=LoginResponse,
        dependencies=[Depends(require_api_key)],
    )
    async def login_post(
        request: Request,
        payload: Any = Body(None),
        http_client: httpx.AsyncClient = Depends(get_http_client),
    ):  # type: ignore
        return await _handle_login(request, payload, http_client)


@router.get("/api/login", dependencies=[Depends(require_api_key)])
async def login_form_view(http_client: httpx.AsyncClient = Depends(get_http_client)):
    """Initial render state of the form (nothing submitted)."""
    form, _, _, _ = _build_form(http_client)
    return form.view()


@router.get(
    "/api/login/{form_id}",
    response_model=FormStatusResponse,
    dependencies=[Depends(require_api_key)],
)
async def login_form_status(form_id: str):
    """Last recorded outcome for a form. Never includes credentials."""
    if not settings.STORE_FORM_STATUS:
        return FormStatusResponse(formId=form_id)
    record = await run_in_threadpool(load_form_status, form_id)
    if not record:
        return FormStatusResponse(formId=form_id)
    return FormStatusResponse(**record)
