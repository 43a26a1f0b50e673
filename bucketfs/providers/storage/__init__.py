"""S3 storage provider.

This package speaks the S3 REST protocol without a vendor SDK:
- Request signing (signer): AWS Signature Version 4
- Listing (listing): ``list-type=2`` XML parsing and continuation tokens
- Location (location): bucket URL parsing and key resolution
- Bucket (bucket): get, upload, delete, contains and list operations
"""

from .signer import RequestSigner, amazon_date, amazon_time
from .listing import ListingPage, ListPaginator, parse_listing
from .location import BucketLocation
from .bucket import Bucket, BucketSettings

__all__ = [
    "RequestSigner",
    "amazon_date",
    "amazon_time",
    "ListingPage",
    "ListPaginator",
    "parse_listing",
    "BucketLocation",
    "Bucket",
    "BucketSettings",
]
