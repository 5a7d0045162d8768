# 健康检查端点
import logging
import time

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import inspect, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.models import Category

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def health_check(db: Session = Depends(get_db)):
    """
    健康检查端点 - 用于负载均衡器/监控系统
    返回服务状态、数据库连接状态以及 category 表是否存在
    """
    start = time.time()

    db_status = "healthy"
    db_latency_ms = 0
    missing_tables: list[str] = []
    try:
        db_start = time.time()
        db.execute(text("SELECT 1"))
        db_latency_ms = round((time.time() - db_start) * 1000, 2)
        tables = set(inspect(db.get_bind()).get_table_names())
        missing_tables = sorted({Category.__tablename__} - tables)
    except SQLAlchemyError as exc:
        logger.warning("数据库健康检查失败: %s", exc)
        db_status = f"unhealthy: {exc}"

    total_latency_ms = round((time.time() - start) * 1000, 2)

    status = "healthy" if db_status == "healthy" and not missing_tables else "degraded"

    return {
        "status": status,
        "timestamp": time.time(),
        "checks": {
            "database": {
                "status": db_status,
                "latency_ms": db_latency_ms,
                "missingTables": missing_tables,
            }
        },
        "latency_ms": total_latency_ms,
    }


@router.get("/ready")
async def readiness_check(db: Session = Depends(get_db)):
    """
    就绪检查 - Kubernetes readiness probe
    数据库可用时才返回 200
    """
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        raise HTTPException(status_code=503, detail="Service not ready") from exc
    return {"ready": True}


@router.get("/live")
async def liveness_check():
    """存活检查 - 只要进程还在运行就返回 200"""
    return {"alive": True}
