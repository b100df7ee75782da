"""
AWS boundary package.

Exports:
  - S3DocumentClient: Blob store for uploaded documents
  - build_document_path: Upload path builder

Dependencies: boto3
System role: AWS integrations
"""

from docqa.boundary.aws.s3_client import S3DocumentClient, build_document_path, slugify

__all__ = ["S3DocumentClient", "build_document_path", "slugify"]
