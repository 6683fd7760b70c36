import os
import ssl
from typing import Any, Optional

CA_BUNDLE_VARS = ("SSL_CERT_FILE", "REQUESTS_CA_BUNDLE")


def _env_path(name: str) -> Optional[str]:
    value = os.environ.get(name)
    if not value:
        return None
    return os.path.expanduser(os.path.expandvars(value))


def create_ssl_context() -> ssl.SSLContext:
    """Verify against the system trust store, or certifi when unavailable.

    The certifi fallback honours ``SSL_CERT_FILE``, ``REQUESTS_CA_BUNDLE`` and
    ``SSL_CERT_DIR``.
    """
    try:
        import truststore

        return truststore.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    except ImportError:
        import certifi

        cafile = next(
            (path for path in map(_env_path, CA_BUNDLE_VARS) if path), None
        )
        return ssl.create_default_context(
            cafile=cafile or certifi.where(),
            capath=_env_path("SSL_CERT_DIR"),
        )


def get_httpx_client_kwargs(follow_redirects: bool = True) -> dict[str, Any]:
    """Keyword arguments shared by the sync and async httpx clients."""
    return {
        "verify": create_ssl_context(),
        "follow_redirects": follow_redirects,
    }
