"""
FastAPI server for media plan calculations.

Provides endpoints for:
- Computing a plan and returning its summary
- Downloading the CSV report
- Comparing what-if scenarios
"""

import logging
import math
from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel, Field

from media_planner import __version__
from media_planner.config.schema import PlanConfig
from media_planner.analysis.export import generate_plan_report
from media_planner.planning.scenarios import compare_scenarios, run_scenarios

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# ============================================================================
# Pydantic Models for API
# ============================================================================

class ScenarioRequest(BaseModel):
    """Request to evaluate a plan under named settings overrides."""
    plan: PlanConfig
    scenarios: Dict[str, Dict[str, Any]] = Field(..., description="{scenario_name: {setting: value}}")
    include_baseline: bool = True


class ScenarioResponse(BaseModel):
    """Comparison rows, one per scenario."""
    plan_name: str
    rows: List[Dict[str, Any]]


def _json_safe(value: Any) -> Any:
    """Replace inf/nan (not representable in JSON) with None."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {k: _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    return value


# ============================================================================
# FastAPI App
# ============================================================================

app = FastAPI(
    title="Media Planner API",
    description="API for user acquisition budget planning",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# API Endpoints
# ============================================================================

@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


@app.post("/plan")
def compute_plan(plan: PlanConfig) -> Dict[str, Any]:
    """Compute a plan and return its summary."""
    logger.info(f"Computing plan '{plan.name}'")
    try:
        result = plan.compute()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return _json_safe({"plan_name": plan.name, **result.get_summary_dict()})


@app.post("/plan/report")
def plan_report(plan: PlanConfig) -> Response:
    """Compute a plan and return the CSV report."""
    logger.info(f"Building CSV report for plan '{plan.name}'")
    try:
        result = plan.compute()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    content = generate_plan_report(plan.settings, plan.channels, result)
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="media_plan_report.csv"'},
    )


@app.post("/scenarios", response_model=ScenarioResponse)
def compare_plan_scenarios(request: ScenarioRequest) -> ScenarioResponse:
    """Evaluate and compare what-if scenarios."""
    try:
        results = run_scenarios(request.plan, request.scenarios, request.include_baseline)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    df = compare_scenarios(results)
    rows = [
        _json_safe({k: (v.item() if hasattr(v, "item") else v) for k, v in record.items()})
        for record in df.to_dict(orient="records")
    ]
    return ScenarioResponse(plan_name=request.plan.name, rows=rows)


# ============================================================================
# Main
# ============================================================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
