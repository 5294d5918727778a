#!/usr/bin/env python3
"""Start the Shed Core API server."""

import uvicorn

from shedcore.api.config import Settings

if __name__ == "__main__":
    uvicorn.run(
        "shedcore.api.main:app",
        host=Settings.HOST,
        port=Settings.PORT,
        reload=Settings.DEBUG,
        reload_dirs=["shedcore"],
    )
