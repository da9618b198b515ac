"""
HMS 主应用入口
酒店管理系统后端：用户、房间、预订、发票与系统配置
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from hms import __version__
from hms.config import settings
from hms.database import init_db
from hms.exceptions import HotelError
from hms.logging_config import setup_logging
from hms.routers import (
    auth, users, room_types, rooms, bookings, booking_details, invoices, configurations
)

setup_logging("DEBUG" if settings.DEBUG else settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    # 启动时初始化数据库
    init_db()
    logger.info(f"{settings.APP_NAME} v{__version__} 启动")
    yield
    logger.info(f"{settings.APP_NAME} 关闭")


app = FastAPI(
    title="HMS - 酒店管理系统",
    description="酒店用户、房间、预订与发票管理后端",
    version=__version__,
    lifespan=lifespan
)

# CORS 配置
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(HotelError)
async def hotel_error_handler(request: Request, exc: HotelError):
    """业务异常统一映射为 HTTP 响应"""
    logger.debug(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# 注册路由
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(room_types.router)
app.include_router(rooms.router)
app.include_router(bookings.router)
app.include_router(booking_details.router)
app.include_router(invoices.router)
app.include_router(configurations.router)


@app.get("/")
def root():
    return {
        "name": settings.APP_NAME,
        "version": __version__,
        "docs": "/docs"
    }


@app.get("/health")
def health_check():
    return {"status": "healthy"}
