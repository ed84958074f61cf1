from fastapi import APIRouter

from careerfit.api.deps import analysis_config
from careerfit.core.career_stages import known_career_stages

router = APIRouter()


@router.get("/health", summary="Health Check", description="Report service status and analysis readiness.")
async def health_check():
    return {
        "status": "healthy",
        "modelConfigured": analysis_config.model_configured,
        "careerStages": list(known_career_stages()),
    }
