from cryptography import x509
from cryptography.hazmat.primitives import serialization

from certnorm.normalization.pem import der_to_pem
from certnorm.parsers.base import BaseCertificateParser
from certnorm.parsers.exceptions import CertificateParseError


class CryptographyParser(BaseCertificateParser):
    """Standards-compliant X.509 parsing with the cryptography package.

    This is the primary parser: DER decoding, block validation and the
    chain resolver all go through it.
    """

    name = "cryptography"

    def load_der(self, der: bytes) -> x509.Certificate:
        try:
            return x509.load_der_x509_certificate(der)
        except CertificateParseError:
            raise
        except Exception as exc:
            raise CertificateParseError(f"cryptography DER parse failed: {exc}") from exc

    def load_pem(self, pem: str) -> x509.Certificate:
        try:
            return x509.load_pem_x509_certificate(pem.encode("ascii"))
        except CertificateParseError:
            raise
        except Exception as exc:
            raise CertificateParseError(f"cryptography PEM parse failed: {exc}") from exc

    def der_to_pem(self, der: bytes) -> str:
        certificate = self.load_der(der)
        return der_to_pem(certificate.public_bytes(serialization.Encoding.DER))
