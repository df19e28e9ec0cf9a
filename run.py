#!/usr/bin/env python3
"""
Development server runner
"""

import os

import uvicorn

from streakboard.core.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "streakboard.main:app",
        host=os.environ.get("HOST", "0.0.0.0"),
        port=int(os.environ.get("PORT", 8000)),
        reload=settings.ENVIRONMENT == "development",
        log_level="debug" if settings.DEBUG else "info",
        access_log=False,
    )
