# routers/route_scan.py
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from core.errors import ScanError
from models.route_scan import RouteScanRequest, ScanResult
from services.directions_service import get_directions
from services.report_store import get_report_store
from services.scan_service import ScanOrchestrator

router = APIRouter(prefix="/api", tags=["route-scan"])

def get_orchestrator() -> ScanOrchestrator:
    return ScanOrchestrator(get_directions(), get_report_store())

@router.post("/route-scan", response_model=ScanResult,
             responses={400: {"description": "malformed start/end"},
                        503: {"description": "directions or report store unavailable"},
                        504: {"description": "collaborators timed out"}})
async def route_scan(body: RouteScanRequest,
                     orchestrator: ScanOrchestrator = Depends(get_orchestrator)):
    try:
        return await orchestrator.scan(body.start, body.end,
                                       tolerance_km=body.tolerance_km,
                                       timeout_sec=body.timeout_sec)
    except ScanError as e:
        return JSONResponse(status_code=e.http_status, content=e.to_dict())
