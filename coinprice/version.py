# coinprice/version.py

SERVICE_NAME = "coinprice"
SERVICE_VERSION = "1.0.0"
API_TITLE = "Just Coin Price"


def version_payload() -> dict:
    """Used by the /version endpoint."""
    return {
        "service": f"{SERVICE_NAME}:{SERVICE_VERSION}",
        "service_version": SERVICE_VERSION,
    }
