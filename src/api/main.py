import logging
import os

from fastapi import FastAPI

from api.routers import export, extract, ops

# Logging configuration
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="LifeCapture")

app.include_router(extract.router)
app.include_router(export.router)
app.include_router(ops.router)


@app.on_event("startup")
async def startup() -> None:
    logger.info("LifeCapture extraction service started")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=os.getenv("HOST", "127.0.0.1"), port=int(os.getenv("PORT", "8000")))
