from OpenSSL import crypto

from certnorm.parsers.base import BaseCertificateParser
from certnorm.parsers.exceptions import CertificateParseError


class PyOpenSSLParser(BaseCertificateParser):
    """Cross-check parser backed by the OpenSSL library through pyOpenSSL."""

    name = "pyopenssl"

    def der_to_pem(self, der: bytes) -> str:
        try:
            certificate = crypto.load_certificate(crypto.FILETYPE_ASN1, der)
            pem = crypto.dump_certificate(crypto.FILETYPE_PEM, certificate)
        except Exception as exc:
            raise CertificateParseError(f"pyOpenSSL DER parse failed: {exc}") from exc
        return pem.decode("ascii").strip()
