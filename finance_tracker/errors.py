"""Error hierarchy for the transaction interpreter.

Only ``InvalidTransactionInput`` ever reaches a caller of the parser. The
``OracleError`` family describes why the language-model tier could not produce
a result; those are absorbed by ``OracleParser`` and turned into a fallback.
"""


class FinanceTrackerError(Exception):
    """Base application error."""


class InvalidTransactionInput(FinanceTrackerError, TypeError):
    """Parser was handed something other than text."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Transaction input must be a string, got {type(value).__name__}")


class OracleError(FinanceTrackerError):
    """Base for failures of the oracle tier."""

    kind = "oracle"

    def __init__(self, detail: str = "") -> None:
        self.detail = detail or self.__class__.__doc__ or self.kind
        super().__init__(self.detail)


class OracleUnconfigured(OracleError):
    """No oracle credential configured."""

    kind = "unconfigured"


class OracleTransportFailure(OracleError):
    """Oracle unreachable, timed out or answered with a non-success status."""

    kind = "transport"


class OracleMalformedResponse(OracleError):
    """Oracle answer is not parseable structured data."""

    kind = "malformed"


class OracleSchemaViolation(OracleError):
    """Oracle answer parsed but failed field-type or closed-set validation."""

    kind = "schema"
