# BulkBridge: multipart uploads naar S3 via presigned URLs

__version__ = "0.1.0"
