"""
Health Check Router
Service liveness and DynamoDB table reachability
"""
from fastapi import APIRouter
from datetime import datetime
import logging

from app.core.config import settings
from app.db import dynamo

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
async def health_check():
    """
    Health check endpoint.
    Returns API status.
    """
    return {
        "status": "healthy",
        "service": settings.PROJECT_NAME,
        "timestamp": datetime.utcnow().isoformat()
    }


@router.get("/status")
def aws_services_status():
    """
    Check that every DynamoDB table the service uses is reachable.
    """
    tables = {
        "users": dynamo.users_table,
        "fuel_records": dynamo.fuel_table,
        "toll_records": dynamo.toll_table,
        "settings": dynamo.settings_table,
    }
    table_status = {}
    for name, table in tables.items():
        try:
            table.scan(Limit=1)
            table_status[name] = {"name": table.name, "status": "accessible"}
        except Exception as e:
            logger.error(f"DynamoDB check for {table.name} failed: {str(e)}")
            table_status[name] = {"name": table.name, "status": "error", "error": str(e)}

    connected = all(t["status"] == "accessible" for t in table_status.values())
    return {
        "timestamp": datetime.utcnow().isoformat(),
        "services": {
            "dynamodb": {
                "connected": connected,
                "region": settings.DYNAMO_REGION,
                "tables": table_status,
            }
        },
        "overall_status": "healthy" if connected else "degraded",
    }
