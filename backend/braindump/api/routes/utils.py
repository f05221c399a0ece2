from fastapi import APIRouter
from fastapi.responses import JSONResponse

from braindump.api.deps import RuntimeDep
from braindump.core.health import status_code_for

router = APIRouter(tags=["utils"])


@router.get("/health", response_model=None)
async def health(runtime: RuntimeDep) -> JSONResponse:
    """
    Database, memory and pool status.

    200 when the database probe succeeds, 503 (status DEGRADED) otherwise.
    Memory over the threshold is reported as a warning only.
    """
    report = await runtime.health.report()
    return JSONResponse(
        status_code=status_code_for(report),
        content=report.model_dump(mode="json", exclude_none=True),
    )
