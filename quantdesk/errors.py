class EngineInputError(ValueError):
    """Raised when an engine call violates one of its input preconditions."""


class InvalidCapitalStructureError(EngineInputError):
    pass


class MissingCostOfEquityInputsError(EngineInputError):
    pass


class NonConvergentGrowthError(EngineInputError):
    """Raised when the discount rate does not exceed the terminal growth rate."""

    def __init__(self, wacc: float, growth: float):
        self.wacc = wacc
        self.growth = growth
        super().__init__(
            f"WACC ({wacc * 100:.2f}%) must be greater than terminal growth rate g "
            f"({growth * 100:.2f}%) for convergence"
        )


class InvalidOptionParametersError(EngineInputError):
    pass


class MissingProjectionsError(EngineInputError):
    pass


class EmptyPortfolioError(EngineInputError):
    pass


class InvalidSimulationParametersError(EngineInputError):
    pass


class NotPositiveDefiniteError(EngineInputError):
    """Raised by strict Cholesky inversion when a pivot is not positive."""

    def __init__(self, index: int, pivot: float):
        self.index = index
        self.pivot = pivot
        super().__init__(f"Matrix is not positive definite (pivot {pivot:.3e} at row {index})")


class UnknownOperationError(EngineInputError):
    def __init__(self, operation: str | None, valid: list[str]):
        self.operation = operation
        self.valid = valid
        super().__init__(f"Unknown operation: {operation}. Valid: {', '.join(valid)}")


class InvalidParametersError(EngineInputError):
    """Raised when operation parameters fail model validation."""
