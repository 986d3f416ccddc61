"""Run the API with uvicorn: ``python -m ecobreak``."""

import uvicorn

from ecobreak.config.settings import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "ecobreak.api.main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.is_local,
    )


if __name__ == "__main__":
    main()
