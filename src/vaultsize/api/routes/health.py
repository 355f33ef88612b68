"""Health check endpoints."""

from typing import Any

from fastapi import APIRouter

from vaultsize.api.deps import AggregatorDep

router = APIRouter()


@router.get("/health")
async def health_check(aggregator: AggregatorDep) -> dict[str, Any]:
    """
    Check the health of the store and the vault catalog.

    Returns:
        dict with status and component health details
    """
    health_status = aggregator.health_check()
    all_healthy = all(status[0] for status in health_status.values())

    return {
        "status": "healthy" if all_healthy else "degraded",
        "components": {
            name: {"healthy": status[0], "message": status[1]}
            for name, status in health_status.items()
        },
    }


@router.get("/health/live")
async def liveness_check() -> dict[str, str]:
    """
    Kubernetes-style liveness probe.

    Returns:
        Simple OK response if the service is running
    """
    return {"status": "ok"}


@router.get("/health/ready")
async def readiness_check(aggregator: AggregatorDep) -> dict[str, Any]:
    """
    Kubernetes-style readiness probe.

    Returns:
        OK if the history store is usable
    """
    store_healthy, message = aggregator.health_check()["store"]

    if store_healthy:
        return {"status": "ok", "ready": True}

    return {
        "status": "not_ready",
        "ready": False,
        "reason": message,
    }
