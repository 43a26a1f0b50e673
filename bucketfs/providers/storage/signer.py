"""AWS Signature Version 4 request signing for the ``s3`` service.

Only two headers are signed, ``x-amz-content-sha256`` and ``x-amz-date``; the
canonical request uses the URL path and query exactly as they will be sent.
"""

import hashlib
import hmac
from datetime import datetime, timezone
from typing import Dict, Optional, Union
from urllib.parse import urlsplit

from ...core.models import Region

ALGORITHM = "AWS4-HMAC-SHA256"
SERVICE = "s3"
TERMINATOR = "aws4_request"
SIGNED_HEADERS = "x-amz-content-sha256;x-amz-date"

AMAZON_DATE_FORMAT = "%Y%m%d"
AMAZON_TIME_FORMAT = "%Y%m%dT%H%M%SZ"


def _utc(now: datetime) -> datetime:
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc)


def amazon_date(now: datetime) -> str:
    """Format ``now`` as ``YYYYMMDD`` in UTC."""
    return _utc(now).strftime(AMAZON_DATE_FORMAT)


def amazon_time(now: datetime) -> str:
    """Format ``now`` as ``YYYYMMDDTHHMMSSZ`` in UTC."""
    return _utc(now).strftime(AMAZON_TIME_FORMAT)


def _hmac(key: bytes, message: str) -> bytes:
    return hmac.new(key, message.encode("utf-8"), hashlib.sha256).digest()


class RequestSigner:
    """Produces the SigV4 headers of a request.

    The signer holds no state; ``sign`` is a pure function of its arguments.
    """

    @staticmethod
    def signing_key(secret_key: str, date: str, region: str) -> bytes:
        """Derive the signing key through the four chained HMACs."""
        key = _hmac(f"AWS4{secret_key}".encode("utf-8"), date)
        key = _hmac(key, region)
        key = _hmac(key, SERVICE)
        return _hmac(key, TERMINATOR)

    @staticmethod
    def canonical_request(method: str, path: str, query: str, content_hash: str, time: str) -> str:
        headers = (
            f"x-amz-content-sha256:{content_hash}\n"
            f"x-amz-date:{time}\n"
        )
        return "\n".join([method, path, query, headers, SIGNED_HEADERS, content_hash])

    def sign(
        self,
        method: str,
        url: str,
        region: Union[Region, str],
        access_key: str,
        secret_key: str,
        body: Optional[bytes],
        now: datetime
    ) -> Dict[str, str]:
        """Sign a request.

        Args:
            method: HTTP method
            url: Absolute URL, path and query already percent-encoded
            region: Region the bucket lives in
            access_key: Access key id
            secret_key: Secret access key
            body: Request body, None hashes as the empty string
            now: Signing timestamp

        Returns:
            The ``x-amz-date``, ``x-amz-content-sha256`` and ``Authorization``
            headers
        """
        region = str(region)
        parts = urlsplit(url)
        date = amazon_date(now)
        time = amazon_time(now)
        content_hash = hashlib.sha256(body or b"").hexdigest()

        canonical = self.canonical_request(
            method.upper(),
            parts.path or "/",
            parts.query,
            content_hash,
            time,
        )
        scope = f"{date}/{region}/{SERVICE}/{TERMINATOR}"
        string_to_sign = "\n".join([
            ALGORITHM,
            time,
            scope,
            hashlib.sha256(canonical.encode("utf-8")).hexdigest(),
        ])
        signature = hmac.new(
            self.signing_key(secret_key, date, region),
            string_to_sign.encode("utf-8"),
            hashlib.sha256,
        ).hexdigest()

        return {
            "x-amz-date": time,
            "x-amz-content-sha256": content_hash,
            "Authorization": (
                f"{ALGORITHM} Credential={access_key}/{scope},"
                f"SignedHeaders={SIGNED_HEADERS},Signature={signature}"
            ),
        }
