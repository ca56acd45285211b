# File: factorlab/factor_core/errors.py

class FactorError(Exception):
    """Base class for every failure raised by the factor operations."""
    pass

class DuplicateLabelError(FactorError, ValueError):
    pass

class UnknownLabelError(FactorError, LookupError):
    pass

class UnorderedComparisonError(FactorError, TypeError):
    pass

class LevelMismatchError(FactorError, ValueError):
    pass

class NonNumericLabelError(FactorError, ValueError):
    pass

class CodeRangeError(FactorError, ValueError):
    pass
