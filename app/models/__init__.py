from .credential import AccessToken, JwtClaimSet, ServiceAccountCredential
from .export import CreatedSpreadsheet, ErrorResponse, ExportRequest, ExportResult
from .image_data import ImageMetadata

__all__ = [
    "AccessToken",
    "JwtClaimSet",
    "ServiceAccountCredential",
    "CreatedSpreadsheet",
    "ErrorResponse",
    "ExportRequest",
    "ExportResult",
    "ImageMetadata",
]
