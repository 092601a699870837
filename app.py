"""Application entry point: FastAPI service exposing the MathJax to LaTeX converter."""
from __future__ import annotations

import uvicorn
from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from core.config import settings
from core.logger import init_logging, logger
from services.conversion_service import LatexConversionService


class ConvertRequest(BaseModel):
    markup: str


def create_app(service: LatexConversionService | None = None) -> FastAPI:
    """Create FastAPI app with health and conversion routes."""
    app = FastAPI(title="MathJax to LaTeX", version="0.1.0")
    converter = service or LatexConversionService()

    @app.on_event("startup")
    async def startup_event() -> None:
        init_logging()
        logger.info("FastAPI service started")

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/convert")
    async def convert(request: ConvertRequest) -> JSONResponse:
        result = converter.convert_markup_with_status(request.markup)
        if not result.ok:
            logger.warning("Conversion rejected: %s", result.latex)
            return JSONResponse(
                {"status": "error", "message": result.latex},
                status_code=400
            )
        return JSONResponse({
            "status": "success",
            "latex": result.latex,
            "format": result.shape,
        })

    return app


def main() -> None:
    init_logging()
    uvicorn.run(create_app(), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
