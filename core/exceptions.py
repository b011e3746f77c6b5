"""Custom exceptions for Tabulario"""


class TabularioError(Exception):
    """Base exception for all Tabulario errors"""
    pass


class UnsupportedFormatError(TabularioError):
    """Requested format has no codec"""
    def __init__(self, fmt, direction: str = "export"):
        super().__init__(f"Unsupported {direction} format: {fmt!r}")
        self.fmt = fmt
        self.direction = direction


class SchemaError(TabularioError):
    """Schema cannot be built or is not usable for the requested codec"""
    pass


class RowConstraintError(TabularioError):
    """A row does not fit its table's columns"""
    def __init__(self, message: str, row: int = None, column: str = None):
        super().__init__(message)
        self.row = row
        self.column = column


class WorkbookReadError(TabularioError):
    """Workbook could not be opened"""
    def __init__(self, message: str, file_path: str = None):
        super().__init__(message)
        self.file_path = file_path


class ExportError(TabularioError):
    """Writing the destination failed"""
    def __init__(self, message: str, export_type=None):
        super().__init__(message)
        self.export_type = export_type


class JobCancelledError(TabularioError):
    """Raised inside a codec once its job has been cancelled"""
    pass
