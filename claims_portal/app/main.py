import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..config import settings
from ..web.routes import router as portal_router
from .api import router as api_router
from .errors import RelayError

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Customer Claims Portal")


@app.exception_handler(RelayError)
async def relay_error_handler(request: Request, exc: RelayError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


app.include_router(api_router)
app.include_router(portal_router)


def run():
    """Entry point for the 'claims-portal' script."""
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
