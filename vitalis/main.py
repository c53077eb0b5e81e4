from fastapi import FastAPI

from vitalis.engine.router import router as engine_router

app = FastAPI(title="Vitalis Engine", version="0.1.0")
app.include_router(engine_router)


@app.get("/")
async def root() -> dict:
    return {
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
        "engine": {
            "insights": "/engine/insights",
            "insight": "/engine/insight",
            "recovery_score": "/engine/recovery-score",
            "body_status": "/engine/body-status",
            "targets": "/engine/targets",
            "catalog": "/engine/catalog",
            "dashboard": "/engine/dashboard/{user_id}",
        },
    }


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
