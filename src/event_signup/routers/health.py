from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, text

from event_signup.config import config
from event_signup.models.database import get_db, get_redis

health = APIRouter(tags=["Health"])


@health.get("/health")
async def health_check():
    """Basic health check endpoint"""
    return {
        "status": "healthy",
        "service": "event-signup",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": config["environment"],
    }


@health.get("/health/detailed")
async def detailed_health_check(
    db: Session = Depends(get_db), redis_client=Depends(get_redis)
):
    """Detailed health check with database and Redis checks"""
    health_status = {
        "status": "healthy",
        "service": "event-signup",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": config["environment"],
        "checks": {},
    }

    # Database connectivity check
    try:
        result = db.exec(text("SELECT 1")).first()
        health_status["checks"]["database"] = "healthy" if result else "unhealthy"
    except Exception as e:
        health_status["checks"]["database"] = f"unhealthy: {str(e)}"
        health_status["status"] = "unhealthy"

    # Redis holds field editor drafts
    try:
        redis_client.ping()
        health_status["checks"]["redis"] = "healthy"
    except Exception as e:
        health_status["checks"]["redis"] = f"unhealthy: {str(e)}"
        health_status["status"] = "unhealthy"

    if health_status["status"] == "unhealthy":
        raise HTTPException(status_code=503, detail=health_status)

    return health_status
