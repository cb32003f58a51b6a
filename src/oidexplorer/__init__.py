"""OID Explorer: read-only lookup service over the OID namespace."""

__version__ = "0.1.0"
