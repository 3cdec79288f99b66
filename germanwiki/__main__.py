from dotenv import find_dotenv, load_dotenv
from os import environ as env
from loguru import logger
from uvicorn import Server, Config
from asyncio import Runner
from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse, UJSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from germanwiki.routes import router
from germanwiki.shared import build_logger
from germanwiki.shared.services import services

load_dotenv(find_dotenv(usecwd=True))


@asynccontextmanager
async def lifespan(app: FastAPI):
    await services.setup(app)
    try:
        yield
    finally:
        await services.close()


app = FastAPI(
    debug=False,
    title="German Wiki API",
    description="Normalized German dictionary entries extracted from de.wiktionary.org.",
    lifespan=lifespan,
)
app.include_router(router)


@app.get(
    "/",
    name="index",
    description="Index endpoint for the German Wiki API.",
    include_in_schema=False,
    response_class=RedirectResponse,
)
async def index(request: Request):
    return "docs"


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    reasons = "; ".join(str(error.get("msg", error)) for error in exc.errors())
    return UJSONResponse(
        {"message": f"Invalid request: {reasons}"},
        status_code=400,
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 500:
        logger.exception(exc)
        return UJSONResponse(
            {"message": "An internal server error occurred."},
            status_code=500,
        )

    return UJSONResponse(
        {
            "message": exc.detail,
        },
        status_code=exc.status_code,
    )


async def startup(server: Server):
    await server.serve()


if __name__ == "__main__":
    config = Config(
        app=app,
        access_log=True,
        host=env.get("HOST", "0.0.0.0"),
        port=int(env.get("PORT", 1337)),
        log_config={
            "version": 1,
            "disable_existing_loggers": False,
            "loggers": {"uvicorn": {"level": "DEBUG"}},
        },
    )
    server = Server(config)
    with Runner() as runner:
        emitter = build_logger("germanwiki")
        try:
            runner.run(startup(server))
        finally:
            emitter.close()
