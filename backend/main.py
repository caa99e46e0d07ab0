"""
AI Platform - FastAPI主应用
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ai_platform.core.config import settings
from ai_platform.api.v1.router import api_router
from ai_platform.core.log_utils import setup_logging, get_logger
from ai_platform.core.log_messages import log_messages
from ai_platform.core.ai.exceptions import GenerationValidationError, ConfigurationError
from ai_platform.core.ai.models import EMPTY_PROMPT_MESSAGE
from ai_platform.core.ai.registry import register_all_providers

# 初始化日志系统
setup_logging()

# 在导入其他模块之前完成日志设置
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    """应用生命周期管理"""
    logger.info("应用启动中...")

    register_all_providers()

    if settings.kling_enabled:
        logger.info("可灵API密钥已配置")
    else:
        logger.warning("可灵API密钥未配置，视频生成请求将返回配置错误")

    logger.info("应用启动完成")

    yield

    logger.info("应用关闭")


# 创建FastAPI应用实例
app = FastAPI(
    title=settings.project_name,
    version=settings.app_version,
    description="基于可灵API的视频生成服务",
    openapi_url=f"{settings.api_v1_str}/openapi.json",
    docs_url=f"{settings.api_v1_str}/docs",
    redoc_url=f"{settings.api_v1_str}/redoc",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["*"]
)


@app.exception_handler(GenerationValidationError)
async def validation_error_handler(_: Request, exc: GenerationValidationError) -> JSONResponse:
    """参数校验失败返回 400 {error}"""
    logger.warning(log_messages.VALIDATION_FAILED, error=exc.message)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": exc.message}
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    """
    请求体解析失败同样返回 400 {error}

    input 缺失、为 null 或类型错误时与空白输入一致；
    其他字段的错误返回第一条错误信息。
    """
    errors = exc.errors()
    if not errors or any(tuple(error.get("loc", ()))[-1:] == ("input",) for error in errors):
        message = EMPTY_PROMPT_MESSAGE
    else:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg', '请求参数无效')}" if field else first.get("msg", "请求参数无效")

    logger.warning(log_messages.VALIDATION_FAILED, error=message)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": message}
    )


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(_: Request, exc: ConfigurationError) -> JSONResponse:
    """配置缺失返回 500 {error, details}"""
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": exc.message, "details": exc.details.get("hint", exc.details)}
    )


# 注册API路由
app.include_router(api_router, prefix=settings.api_v1_str)


@app.get("/")
def read_root():
    """根路径"""
    return {
        "message": "AI Platform Video API",
        "version": settings.app_version,
        "docs": f"{settings.api_v1_str}/docs"
    }


@app.get("/health")
def health_check():
    """健康检查"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.app_debug,
        log_level=settings.log_level.lower()
    )
