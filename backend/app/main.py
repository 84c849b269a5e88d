import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app import config
from app.exceptions import BadRequestError, QuotesAPIError
from app.routers import characters, conversations, quotes

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="The Office Quotes API",
    description="Quotes, characters and conversations from The Office",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(characters.router, prefix="/characters", tags=["characters"])
app.include_router(quotes.router, prefix="/quotes", tags=["quotes"])
app.include_router(conversations.router, prefix="/conversations", tags=["conversations"])


@app.exception_handler(QuotesAPIError)
async def api_error_handler(request: Request, exc: QuotesAPIError):
    return JSONResponse(status_code=exc.status_code, content={"status": exc.status})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.info(f"Rejected {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=BadRequestError.status_code,
        content={"status": BadRequestError.status},
    )


@app.get("/")
async def root():
    return {"status": "ok", "result": "The Office Quotes API"}


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=config.PORT)
