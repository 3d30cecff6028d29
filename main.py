# main.py
import logging

from fastapi import FastAPI

from core.config import LOG_LEVEL
from routers.route_scan import router as route_scan_router

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(message)s")

app = FastAPI(title="Path Scan API", version="1.0.0")
app.include_router(route_scan_router)

@app.get("/healthz")
def healthz():
    return {"ok": True}
