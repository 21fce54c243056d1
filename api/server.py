"""
FastAPI server for the PC build compatibility engine.

Thin HTTP surface over CompatibilityChecker: the caller sends a build snapshot
(or a single product) and gets issues, suggestions or extracted facts back.
Product lookup and build persistence stay with the caller.
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv
import logging

load_dotenv()

from pcbuild_compat import CompatibilityChecker
from api.models import (
    BuildRequest,
    CompatibilityResponse,
    SuggestionsResponse,
    PlacementRequest,
    PlacementResponse,
    ProductRequest,
    ClassifyResponse,
    AttributesResponse,
)

# Initialize FastAPI app
app = FastAPI(
    title="PC Build Compatibility API",
    description="Compatibility checks for PC builds",
    version="1.0.0"
)

# Enable CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure this for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app.state.checker = None


def get_checker() -> CompatibilityChecker:
    """Checker bound to the configured tables, loaded on first use."""
    checker = app.state.checker
    if checker is None:
        checker = CompatibilityChecker.from_config()
        app.state.checker = checker
        logger.info("Compatibility checker initialized from configuration")
    return checker


# API Endpoints
@app.get("/")
async def root():
    """Health check endpoint."""
    return {
        "status": "online",
        "service": "PC Build Compatibility API",
        "version": "1.0.0"
    }


@app.post("/compatibility/check", response_model=CompatibilityResponse)
async def check_compatibility(request: BuildRequest):
    """
    Run every compatibility rule over the build.

    Returns issues in display order, the power estimate and the advisory
    suggestions.
    """
    checker = get_checker()
    result = checker.check(request.build)
    report = result["report"]
    return CompatibilityResponse(
        compatible=report.compatible,
        estimated_power=report.estimated_power,
        issues=report.issues,
        suggestions=result["suggestions"],
    )


@app.post("/compatibility/suggestions", response_model=SuggestionsResponse)
async def suggestions(request: BuildRequest):
    """Advisory suggestions only."""
    return SuggestionsResponse(suggestions=get_checker().generate_suggestions(request.build))


@app.post("/compatibility/placement", response_model=PlacementResponse)
async def validate_placement(request: PlacementRequest):
    """Check whether a product belongs in the given slot before it is placed."""
    checker = get_checker()
    result = checker.validate_placement(request.slot, request.product)
    if not result.valid:
        logger.info(f"Rejected placement of '{request.product.name}' in slot {request.slot}")
    return PlacementResponse(
        valid=result.valid,
        message=result.message,
        category=checker.classify(request.product),
    )


@app.post("/products/classify", response_model=ClassifyResponse)
async def classify_product(request: ProductRequest):
    return ClassifyResponse(category=get_checker().classify(request.product))


@app.post("/products/attributes", response_model=AttributesResponse)
async def product_attributes(request: ProductRequest):
    """Extracted facts for one product (null = undeterminable)."""
    return AttributesResponse(attributes=get_checker().extract_attributes(request.product))


if __name__ == "__main__":
    import uvicorn

    print("Starting PC Build Compatibility API Server...")
    print("API Documentation: http://localhost:8000/docs")
    print("=" * 70)

    uvicorn.run(app, host="0.0.0.0", port=8000)
