from fastapi import HTTPException, status


class ProductNotFoundError(Exception):
    """Aucun produit pour ce code-barres, ni en local ni chez Open Food Facts"""

    def __init__(self, barcode: str):
        self.barcode = barcode
        super().__init__(f"Product {barcode} not found")


class SourceUnavailableError(Exception):
    """Échec de transport ou de parsing côté Open Food Facts"""

    def __init__(self, operation: str, reason: str):
        self.operation = operation
        self.reason = reason
        super().__init__(f"Open Food Facts {operation} failed: {reason}")


class ComparisonNotFoundError(Exception):
    def __init__(self, comparison_id: int):
        self.comparison_id = comparison_id


class BatchShareNotFoundError(Exception):
    def __init__(self, reference: str):
        self.reference = reference


class ProductNotFoundException(HTTPException):
    def __init__(self):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND, detail="Product not found"
        )


class InvalidComparisonException(HTTPException):
    def __init__(self, reason: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid comparison: {reason}",
        )
