from abc import ABC, abstractmethod


class BaseCertificateParser(ABC):
    """Contract for X.509 parser adapters used by the decoding strategies."""

    name: str = "base"

    @abstractmethod
    def der_to_pem(self, der: bytes) -> str:
        """Parse DER bytes and return the certificate as a single PEM block.

        Args:
            der: Candidate DER-encoded certificate.

        Returns:
            PEM text without a trailing newline.

        Raises:
            CertificateParseError: if the bytes are not a well-formed certificate.
        """
