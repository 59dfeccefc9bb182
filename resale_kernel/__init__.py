"""
Resale Kernel - shared foundations for the back-office financial core.

- Decimal-only money primitives with cent rounding
- Immutable sale and lot value objects
- Typed exceptions and request validation
- Structured JSON logging
"""

__version__ = "0.1.0"
