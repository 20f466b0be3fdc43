from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from config import get_settings
from logging_config import setup_logging
from middleware.request_logging import RequestLoggingMiddleware
from routes import dev_tools
from routes.tools import whop

settings = get_settings()
setup_logging(settings.log_level)

app = FastAPI(title="WhopGPT Tools")

app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(whop.router, prefix="/api/tools", tags=["Whop Admin Tools"])
app.include_router(dev_tools.router, prefix="/dev/tools", tags=["Dev Tool Harness"])


@app.get("/health")
async def health():
    return {
        "status": "ok",
        "writesEnabled": settings.allow_writes,
    }
