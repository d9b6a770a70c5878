# api/main.py
"""
FastAPI backend - exposes the planeframe solver as a REST API.

Every request is one independent analysis: the structure is rebuilt from
the request body and nothing is kept between calls.
"""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import StreamingResponse
import sys
from pathlib import Path
import io
import csv
import json
import logging

# Add project root to path to import planeframe
sys.path.insert(0, str(Path(__file__).parent.parent))

from planeframe import __version__
from planeframe.analysis import analyze_structure
from planeframe.post import summarize
from planeframe.schema import AnalysisResults, StructureModel

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Planeframe API",
    description="2D frame, truss and spring analysis",
    version=__version__,
)

# CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _solve_or_400(model: StructureModel) -> AnalysisResults:
    result = analyze_structure(model, include_matrices=False)
    if not result.is_stable:
        logger.info("Export rejected: %s", result.message)
        raise HTTPException(status_code=400, detail=result.message)
    return result


# =============================================================================
# API Endpoints
# =============================================================================

@app.get("/")
async def root():
    """Health check."""
    return {"status": "ok", "service": "Planeframe API", "version": __version__}


@app.post("/api/analyze", response_model=AnalysisResults, response_model_exclude_none=True)
async def analyze(model: StructureModel, include_matrices: bool = False):
    """Analyze a structure. Unstable structures return isStable=false, not an error."""
    return analyze_structure(model, include_matrices=include_matrices)


@app.post("/api/export/csv")
async def export_csv(model: StructureModel):
    """Export member end forces as CSV."""
    result = _solve_or_400(model)

    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(['member_id', 'end', 'axial_N', 'shear_N', 'moment_Nm'])
    for member_id, forces in result.member_forces.items():
        for end_name, end in (('start', forces.start), ('end', forces.end)):
            writer.writerow([
                member_id, end_name,
                round(end.fx, 3), round(end.fy, 3), round(end.moment, 3),
            ])

    output.seek(0)
    return StreamingResponse(
        iter([output.getvalue()]),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=member_forces.csv"}
    )


@app.post("/api/export/json")
async def export_json(model: StructureModel):
    """Export the model, its results and a summary as one JSON document."""
    result = _solve_or_400(model)
    payload = result.model_dump(by_alias=True, exclude_none=True)

    document = {
        "version": "1.0",
        "model": model.model_dump(by_alias=True, exclude_none=True, mode="json"),
        "results": payload,
        "summary": summarize(
            payload["displacements"], payload["reactions"], payload["memberForces"]
        ),
    }

    return StreamingResponse(
        iter([json.dumps(document, indent=2)]),
        media_type="application/json",
        headers={"Content-Disposition": "attachment; filename=structure_results.json"}
    )


if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(level=logging.INFO)
    uvicorn.run(app, host="0.0.0.0", port=8000)
