import os
import sys
import logging
from datetime import datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv
import uvicorn

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

# Set up logging first
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from setup_logging_optimized import setup_logging

setup_logging()

# Env must be loaded before agents.config is imported
load_dotenv(override=True)

sentry_logging = LoggingIntegration(
    level=logging.INFO,        # Capture info and above as breadcrumbs
    event_level=logging.ERROR  # Send errors as events
)

# No-op when SENTRY_DSN is unset
sentry_sdk.init(
    dsn=os.getenv("SENTRY_DSN"),
    integrations=[
        FastApiIntegration(transaction_style='endpoint'),
        sentry_logging,
    ],
    traces_sample_rate=0.1,
    environment=os.getenv("ENV", "development"),
    release=os.getenv("RENDER_GIT_COMMIT", "unknown"),
    send_default_pii=False,
)

from agents.config import CORS_ALLOW_ORIGINS, SERVER_HOST, SERVER_PORT
from api.requests.api_analyze import router as analyze_router

logger = logging.getLogger(__name__)

app = FastAPI(title="Brand Signal API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_credentials="*" not in CORS_ALLOW_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(analyze_router)


@app.get("/api/health")
async def health_check():
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}


if __name__ == "__main__":
    logger.info(f"Starting Brand Signal API on http://{SERVER_HOST}:{SERVER_PORT}")
    logger.info(f"Page renderer: {os.getenv('PAGE_RENDERER', 'playwright')}")
    uvicorn.run("api.brand_server:app", host=SERVER_HOST, port=SERVER_PORT, workers=1)
