from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import JSONResponse

from careerfit.api.deps import get_pipeline
from careerfit.core.rate_limit import rate_limit
from careerfit.core.security import check_api_key
from careerfit.services.pipeline import DocumentAnalysisPipeline

router = APIRouter()


@router.post(
    "/analysis/documents",
    summary="Analyze CV and cover letter against a job",
    description="Scores the supplied documents for one candidate against one job opening.",
)
@rate_limit()
async def analyze_documents(
    request: Request,
    pipeline: DocumentAnalysisPipeline = Depends(get_pipeline),
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
):
    check_api_key(x_api_key)
    body = await request.body()
    status_code, payload = await pipeline.handle(body)
    return JSONResponse(content=payload, status_code=status_code)
