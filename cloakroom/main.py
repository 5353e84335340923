# cloakroom/main.py
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cloakroom.core.config import get_settings
from cloakroom.core.database import Base, engine
from cloakroom.core.errors import AppError, to_payload
from cloakroom.core.logging import get_logger
from cloakroom.branch import models as branch_models  # noqa: F401  (registers table)
from cloakroom.pricing.routes import router as pricing_router
from cloakroom.ticket.routes import public_router as public_ticket_router
from cloakroom.ticket.routes import router as ticket_router

Base.metadata.create_all(bind=engine)

logger = get_logger(__name__)

settings = get_settings()
app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESC,
    version=settings.APP_VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error("request failed", extra={"path": request.url.path, "error": exc.message})
    return JSONResponse(status_code=exc.status_code, content=to_payload(exc))


# Routers
app.include_router(ticket_router)
app.include_router(public_ticket_router)
app.include_router(pricing_router)

@app.get("/health", tags=["Health"])
def health():
    return {"status": "ok"}
