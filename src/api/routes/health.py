"""
Health check endpoints.

The storefront keeps answering listings while Supabase is down by serving
the sample catalog (when SAMPLE_DATA_FALLBACK is on). The detailed check
and the readiness check therefore report on the catalog itself: whether
it is reachable, whether it has active products, and whether shoppers
are currently being shown sample products instead of real ones.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends

from api.dependencies import get_product_repository_optional
from catalog.repository import ProductRepository
from config.constants import SERVICE_NAME
from config.settings import Settings, get_settings


router = APIRouter(tags=["Health"])


async def check_catalog(repository: Optional[ProductRepository]) -> Dict[str, Any]:
    """
    Catalog state for health reporting.

    status is one of:
        connected       active products are readable
        empty           reachable, but no active products
        error           the read failed
        not_configured  no Supabase client could be built
    """
    if repository is None:
        return {"status": "not_configured", "error": None, "error_type": None}

    result = await repository.check_availability()
    if result.ok:
        return {
            "status": "connected" if result.data else "empty",
            "error": None,
            "error_type": None,
        }
    return {"status": "error", "error": result.error, "error_type": result.error_type}


def serving_sample_data(catalog: Dict[str, Any], repository: Optional[ProductRepository]) -> bool:
    """Full listings are answered from the sample catalog while reads fail."""
    return catalog["status"] == "error" and repository is not None and repository.fallback_enabled


@router.get("/health")
async def health_check() -> Dict[str, Any]:
    """Basic health check endpoint."""
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
    }


@router.get("/health/detailed")
async def detailed_health_check(
    repository: Optional[ProductRepository] = Depends(get_product_repository_optional),
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    """
    Detailed health check.

    healthy:   catalog connected with active products
    degraded:  catalog empty, or unreachable with sample products being served
    unhealthy: catalog unreachable (or unconfigured) and nothing to serve
    """
    catalog = await check_catalog(repository)
    samples_in_use = serving_sample_data(catalog, repository)

    if catalog["status"] == "connected":
        overall = "healthy"
    elif catalog["status"] == "empty" or samples_in_use:
        overall = "degraded"
    else:
        overall = "unhealthy"

    return {
        "status": overall,
        "service": SERVICE_NAME,
        "environment": settings.environment,
        "checks": {
            "config": "ok",
            "catalog": catalog,
            "sample_data": {
                "enabled": settings.sample_data_fallback,
                "in_use": samples_in_use,
            },
        },
    }


@router.get("/ready")
async def readiness_check(
    repository: Optional[ProductRepository] = Depends(get_product_repository_optional),
) -> Dict[str, str]:
    """
    Kubernetes-style readiness check.

    Ready in "live" mode when the catalog is reachable, in "sample_data"
    mode when it is not but the sample fallback can answer listings.
    """
    catalog = await check_catalog(repository)

    if catalog["status"] == "not_configured":
        return {"status": "not_ready", "reason": "database_not_configured"}
    if catalog["status"] == "error":
        if serving_sample_data(catalog, repository):
            return {"status": "ready", "mode": "sample_data"}
        return {"status": "not_ready", "reason": "catalog_unavailable"}
    return {"status": "ready", "mode": "live"}


@router.get("/live")
async def liveness_check() -> Dict[str, str]:
    """Kubernetes-style liveness check."""
    return {"status": "alive"}
