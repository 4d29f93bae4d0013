from __future__ import annotations

import uvicorn

from consult_providers.config import get_settings


def main() -> None:
    """Start the development server for the consultation FastAPI app.

    - CONSULT_SERVICE_HOST: interface to bind (default "127.0.0.1")
    - CONSULT_SERVICE_PORT: port to bind (default 3001)
    - CONSULT_SERVICE_RELOAD: "true"/"false" to toggle auto-reload (default off)
    """
    settings = get_settings()
    uvicorn.run(
        "consult_providers.service.app:get_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
    )


if __name__ == "__main__":
    main()
