"""Module with the API utility functions."""

from fastapi import HTTPException, Request

from predict_age.configuration import config


def get_ip_address_or_raise(fastapi_request: Request) -> str:
    """
    Get an IP address of the client sending the request raising an exception if missing.

    The `X-Forwarded-For` header is set by clients at will, so it is honoured
    only if `api_trust_forwarded_for` is enabled in the configuration.

    Args:
        fastapi_request (Request): The request of the client.

    Raises:
        HTTPException: Raised if an IP address cannot be retrieved from the request.

    Returns:
        str: IP address of the client.
    """
    if config.api_trust_forwarded_for:
        ip = fastapi_request.headers.get("X-Forwarded-For")
        if ip:
            # The first address is the original client behind proxies.
            return ip.split(",")[0].strip()
    if fastapi_request.client is None:
        raise HTTPException(
            detail="Unable to identify the IP address of the client.",
            status_code=401,
        )
    return fastapi_request.client.host
