"""OAuth 1.0a request signer for NetSuite token-based authentication.

NetSuite RESTlets authenticate every request with a one-legged OAuth 1.0a
signature: consumer and token credentials are issued up front, so there is
no request-token or verifier exchange, only per-request signing.

Reference: RFC 5849 - The OAuth 1.0 Protocol, section 3.4
"""

import base64
import hashlib
import hmac
import secrets
import time
from typing import Callable, Dict, Mapping, Optional
from urllib.parse import quote

from suitelink.domains.restlet.types import Credentials
from suitelink.domains.restlet.urls import split_url

SIGNATURE_METHOD = "HMAC-SHA256"
OAUTH_VERSION = "1.0"


class OAuth1Signer:
    """Builds OAuth 1.0a HMAC-SHA256 Authorization headers.

    Nonce and timestamp generators can be injected so that signatures are
    reproducible in tests; everything else is a pure function of its inputs.
    """

    def __init__(
        self,
        nonce_factory: Optional[Callable[[], str]] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        """Initialize the signer.

        Args:
            nonce_factory: Returns a fresh nonce. Defaults to 16 random bytes as hex.
            clock: Returns the current unix time. Defaults to time.time.
        """
        self._nonce_factory = nonce_factory or self._generate_nonce
        self._clock = clock or time.time

    @staticmethod
    def _generate_nonce() -> str:
        """Generate a cryptographically secure random nonce."""
        return secrets.token_hex(16)

    def _get_timestamp(self) -> str:
        """Get current Unix timestamp as string."""
        return str(int(self._clock()))

    @staticmethod
    def _percent_encode(value: str) -> str:
        """Percent-encode a value according to RFC 3986.

        Encodes all characters except unreserved: A-Z, a-z, 0-9, -, ., _, ~
        In particular ! * ' ( ) are encoded, unlike JavaScript's encodeURIComponent.
        """
        return quote(str(value), safe="~")

    def _build_signature_base_string(
        self, method: str, base_url: str, params: Mapping[str, str]
    ) -> str:
        """Build the signature base string per RFC 5849.

        Format: HTTP_METHOD&URL&NORMALIZED_PARAMS
        """
        encoded = sorted(
            (self._percent_encode(k), self._percent_encode(v)) for k, v in params.items()
        )
        param_str = "&".join(f"{k}={v}" for k, v in encoded)

        parts = [
            method.upper(),
            self._percent_encode(base_url),
            self._percent_encode(param_str),
        ]
        return "&".join(parts)

    def _sign_hmac_sha256(self, base_string: str, consumer_secret: str, token_secret: str) -> str:
        """Sign the base string using HMAC-SHA256.

        Signing key: percent_encode(consumer_secret)&percent_encode(token_secret)
        """
        encoded_consumer = self._percent_encode(consumer_secret)
        encoded_token = self._percent_encode(token_secret)
        key = f"{encoded_consumer}&{encoded_token}"
        key_bytes = key.encode("utf-8")
        base_bytes = base_string.encode("utf-8")

        signature_bytes = hmac.new(key_bytes, base_bytes, hashlib.sha256).digest()
        return base64.b64encode(signature_bytes).decode("utf-8")

    def _build_authorization_header(self, realm: str, params: Mapping[str, str]) -> str:
        """Build the OAuth Authorization header.

        Format: OAuth realm="...", oauth_consumer_key="...", oauth_nonce="...", ...
        The realm is emitted first and verbatim; it is never part of the signature.
        """
        sorted_items = sorted(params.items())
        param_strings = [
            f'{self._percent_encode(k)}="{self._percent_encode(v)}"' for k, v in sorted_items
        ]
        return f'OAuth realm="{realm}", ' + ", ".join(param_strings)

    def oauth_parameters(self, method: str, url: str, credentials: Credentials) -> Dict[str, str]:
        """Compute the signed OAuth parameter set for one request.

        Query parameters already present on `url` are signed together with the
        OAuth parameters; on a key collision the OAuth value wins.

        Args:
            method: HTTP method.
            url: Full request URL, including any query string.
            credentials: Consumer and token credentials.

        Returns:
            The OAuth parameters including ``oauth_signature``.
        """
        base_url, query_params = split_url(url)

        oauth_params = {
            "oauth_consumer_key": credentials.consumer_key,
            "oauth_token": credentials.token_id,
            "oauth_signature_method": SIGNATURE_METHOD,
            "oauth_timestamp": self._get_timestamp(),
            "oauth_nonce": self._nonce_factory(),
            "oauth_version": OAUTH_VERSION,
        }

        base_string = self._build_signature_base_string(
            method, base_url, {**query_params, **oauth_params}
        )
        oauth_params["oauth_signature"] = self._sign_hmac_sha256(
            base_string, credentials.consumer_secret, credentials.token_secret
        )
        return oauth_params

    def authorization_header(self, method: str, url: str, credentials: Credentials) -> str:
        """Produce the Authorization header value for a request.

        Args:
            method: HTTP method.
            url: Full request URL, including any query string.
            credentials: Credentials; the realm is derived from the account id.

        Returns:
            The ``OAuth realm="...", ...`` header value.
        """
        oauth_params = self.oauth_parameters(method, url, credentials)
        return self._build_authorization_header(credentials.realm, oauth_params)
