import uvicorn

from checkout_buddy.core.config import settings


def main():
    uvicorn.run(
        "checkout_buddy.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
