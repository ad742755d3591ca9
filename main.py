from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
import time
import logging

from config import settings

logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s | %(levelname)s | %(message)s")
log = logging.getLogger(__name__)

def create_app() -> FastAPI:
    app = FastAPI(
        title=f"{settings.APP_NAME} API",
        version="1.0.0",
        description="Workout plan generation, difficulty adjustment and recommendations.",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = (time.perf_counter() - start) * 1000
        response.headers["X-Process-Time-Ms"] = f"{elapsed:.2f}"
        return response

    @app.on_event("startup")
    async def startup():
        from database import init_db
        import models  # ensure all models are registered
        await init_db()
        log.info(f"Database ready at {settings.DATABASE_URL.split('://')[0]}")

    @app.get("/health", tags=["Health"])
    async def health_check():
        return {"status": "ok", "version": "1.0.0"}

    from routes import plans_router, profile_router, recommendations_router, tracking_router, dashboard_router
    app.include_router(plans_router, prefix="/plans", tags=["Plans"])
    app.include_router(profile_router, prefix="/profile", tags=["Profile"])
    app.include_router(recommendations_router, prefix="/recommendations", tags=["Recommendations"])
    app.include_router(tracking_router, prefix="/tracking", tags=["Tracking"])
    app.include_router(dashboard_router, prefix="/dashboard", tags=["Dashboard"])

    return app


app = create_app()
