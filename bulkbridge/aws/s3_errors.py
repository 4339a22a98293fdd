# bulkbridge/aws/s3_errors.py
from typing import Any, Dict

from botocore.exceptions import ClientError


def describe_client_error(e: BaseException) -> Dict[str, Any]:
    """Compacte, log-vriendelijke samenvatting van een boto3/botocore fout."""
    if isinstance(e, ClientError):
        err = e.response.get("Error", {}) or {}
        meta = e.response.get("ResponseMetadata", {}) or {}
        return {
            "type": "S3ClientError",
            "code": err.get("Code", ""),
            "message": err.get("Message", "") or str(e),
            "aws_http": meta.get("HTTPStatusCode"),
            "aws_request_id": meta.get("RequestId"),
        }
    # BotoCoreError (netwerk, credentials, endpoint) en overige fouten
    return {"type": type(e).__name__, "code": None, "message": str(e)}
