from __future__ import annotations


class CartonizationError(Exception):
    """Base class for every error raised by the cartonization domain."""

    code = "cartonization_error"


class NonPositiveValueError(CartonizationError, ValueError):
    code = "non_positive_value"


class ValidationError(CartonizationError):
    """Request rejected before packing started; nothing was computed."""

    code = "validation_failed"


class InfeasibleItemError(CartonizationError):
    """No active carton can take the item, even as the only thing in it."""

    code = "infeasible_item"

    def __init__(self, sku: str):
        super().__init__(f"Cannot pack item: {sku}")
        self.sku = sku


class ConstraintViolationError(CartonizationError):
    code = "constraint_violation"


class CartonStateError(CartonizationError, ValueError):
    code = "invalid_carton"


class CartonNotFoundError(CartonizationError):
    code = "carton_not_found"

    def __init__(self, carton_id: str):
        super().__init__(f"Carton not found: {carton_id}")
        self.carton_id = carton_id


class SolutionNotFoundError(CartonizationError):
    code = "solution_not_found"

    def __init__(self, solution_id: str):
        super().__init__(f"Packing solution not found: {solution_id}")
        self.solution_id = solution_id


class NoActiveCartonsError(CartonizationError):
    code = "no_active_cartons"

    def __init__(self):
        super().__init__("No active cartons available")


class EnrichmentError(CartonizationError):
    code = "enrichment_failed"

    def __init__(self, sku: str, message: str | None = None):
        super().__init__(message or f"Product not found for SKU: {sku}")
        self.sku = sku


class CatalogUnavailableError(EnrichmentError):
    code = "catalog_unavailable"
