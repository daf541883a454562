class CertificateParseError(Exception):
    """Raised when a parser adapter cannot read the given bytes as an X.509 certificate."""
