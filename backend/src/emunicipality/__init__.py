"""eMunicipality backend.

REST API for municipal document requests: citizens, document types and the
document requests linking them.
"""

__version__ = "1.0.0"
