"""
Errors raised by the upload / storage / export collaborators.
"""
from __future__ import annotations


class DataError(Exception):
    http_status: int = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UploadError(DataError):
    http_status = 400


class UnsupportedFileType(DataError):
    http_status = 400


class FileTooLarge(DataError):
    http_status = 413


class RowUpdateError(DataError):
    http_status = 400


class ShareNotFound(DataError):
    http_status = 404

    def __init__(self, share_id: str):
        super().__init__("Shared design not found")
        self.share_id = share_id
