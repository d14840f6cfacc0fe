"""Run the API server: ``python -m issuescope``."""

from __future__ import annotations

import os

import uvicorn


def main() -> None:
    uvicorn.run(
        "issuescope.api:create_app",
        factory=True,
        host=os.environ.get("ISSUESCOPE_HOST", "127.0.0.1"),
        port=int(os.environ.get("ISSUESCOPE_PORT", "8000")),
        log_config=None,
    )


if __name__ == "__main__":
    main()
