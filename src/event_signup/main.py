#!/usr/bin/env python3
"""Event Signup - Admin panel and public registration web server"""

import uvicorn
from fastapi import FastAPI
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from event_signup.config import config
from event_signup.logging_config import get_logger, setup_logging
from event_signup.routers.admin import router as admin_router
from event_signup.routers.health import health
from event_signup.routers.registration import router as registration_router

# Configure logging (INFO -> stdout, WARNING/ERROR -> stderr)
setup_logging()
logger = get_logger(__name__)


app = FastAPI(
    title="Event Signup",
    description="Create events, configure their registration fields and collect individual or group registrations",
    version="1.0.0",
    license_info={
        "name": "MIT",
    },
)

# Trust proxy headers so redirects keep the original scheme behind a TLS proxy
app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")

# Include routers
app.include_router(health)
app.include_router(registration_router)
app.include_router(admin_router)


def run():
    port = config["app_port"]
    logger.info(f"Starting Event Signup on 0.0.0.0:{port}")
    logger.info("Registration form available at /")
    logger.info("Admin panel available at /admin")

    try:
        uvicorn.run(
            app, host="0.0.0.0", port=port, log_level=config["log_level"].lower()
        )
    except Exception as e:
        logger.error(f"Failed to start server: {e}")
        raise


if __name__ == "__main__":
    run()
