"""
Development server runner.

    python -m roomshare
"""

import uvicorn

from .core.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "roomshare.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.environment == "development",
        log_level=settings.log_level.lower(),
    )
