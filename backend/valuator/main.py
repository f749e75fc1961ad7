import logging
from pathlib import Path
from fastapi import FastAPI
from fastapi import APIRouter
from dotenv import load_dotenv

# Load environment variables from .env file in project root
project_root = Path(__file__).resolve().parents[2]
env_path = project_root / '.env'
if env_path.exists():
    load_dotenv(dotenv_path=env_path, override=False)

from .config import get_settings

# Configure logging to show INFO level logs
logging.basicConfig(
    level=get_settings().log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)

# Import API routers from each domain
from .domains.valuation.api.public_endpoints import router as valuation_router
from .domains.insights.api.public_endpoints import router as insights_router
from .domains.reporting.api.public_endpoints import router as reporting_router

app = FastAPI(
    title="Venture Valuator API",
    description="Scorecard valuation for early-stage web3 ventures with AI-generated competitor, risk and roadmap analysis.",
    version="0.1.0"
)

# Create a main API router to group all versioned endpoints
api_router = APIRouter()

api_router.include_router(valuation_router, prefix="/valuation", tags=["Valuation"])
api_router.include_router(insights_router, prefix="/insights", tags=["Insights"])
api_router.include_router(reporting_router, prefix="/report", tags=["Reporting"])

app.include_router(api_router, prefix="/api/v1")


@app.get("/")
async def read_root():
    return {
        "message": "Welcome to Venture Valuator API",
        "version": "0.1.0",
        "endpoints": {
            "valuation": "POST /api/v1/valuation - Scorecard valuation with breakdown",
            "competitors": "POST /api/v1/insights/competitors - AI competitor analysis",
            "risk": "POST /api/v1/insights/risk - AI risk audit",
            "roadmap": "POST /api/v1/insights/roadmap - AI roadmap check",
            "report": "POST /api/v1/report - Full downloadable report",
        },
        "documentation": "/docs",
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
