"""Quick launcher for the MathJax to LaTeX web service."""
from __future__ import annotations


def main() -> None:
    """Launch the FastAPI app with uvicorn."""
    from app import create_app, settings
    import uvicorn
    from core.logger import init_logging, logger

    init_logging()
    app = create_app()
    logger.info("Starting FastAPI server at http://%s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
