"""
Org Chart Backend - FastAPI entry point.
Fetches the organization tree from the HR backend and lays it out for the chart view.
"""

import os

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from api import register_routes

app = FastAPI(title="Org Chart Backend")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on {} {}", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": str(exc) or "Internal server error"})


@app.get("/api/health")
async def health():
    return {"status": "ok"}


register_routes(app)


if __name__ == "__main__":
    import uvicorn

    port = int(os.environ.get("ORGCHART_PORT", "3001"))
    logger.info("Starting org chart backend on port {}", port)
    uvicorn.run(app, host="0.0.0.0", port=port)
