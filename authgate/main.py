from fastapi import FastAPI
from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from authgate.api.routes import router
from authgate.core.notifications import LOGIN_FAILED_FALLBACK
from authgate.observability.logging import log
from authgate.settings import settings

app = FastAPI(title="Login Gate API")

origins = [x.strip() for x in settings.CORS_ORIGINS.split(",") if x.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


@app.get("/")
def root():
    return {
        "status": "ok",
        "message": "Login gate is running. Use /health and POST /api/login.",
    }


@app.get("/health")
def health():
    return {"status": "ok"}


# ---------------------------------------------------------------------------
# The form must stay usable whatever breaks behind it: answer with a FAILED
# attempt carrying the generic message instead of a bare 500.
# ---------------------------------------------------------------------------
@app.exception_handler(Exception)
async def universal_exception_handler(request: Request, exc: Exception):
    log(event="unhandled_exception", path=request.url.path, errorType=type(exc).__name__, error=str(exc)[:300])
    return JSONResponse(
        status_code=200,
        content={
            "formId": "default",
            "status": "FAILED",
            "reason": LOGIN_FAILED_FALLBACK,
            "notifications": [{"message": LOGIN_FAILED_FALLBACK, "severity": "error"}],
            "redirect": None,
            "authenticated": False,
        },
    )


log(event="boot", authServiceConfigured=bool(settings.AUTH_SERVICE_URL), defaultRedirect=settings.DEFAULT_REDIRECT_PATH)
