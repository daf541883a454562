"""Descriptive fields of the leaf certificate for the persistence layer."""

import math
from datetime import datetime, timezone

from cryptography import x509
from cryptography.hazmat.primitives.asymmetric import dsa, ec, ed448, ed25519, rsa
from cryptography.x509.oid import NameOID

from certnorm.logging.logger import Log
from certnorm.normalization.models import CertificateMetadata, NormalizedBundle
from certnorm.normalization.pem import block_payload, decode_payload
from certnorm.parsers.cryptography_adapter import CryptographyParser

EXPIRING_SOON_DAYS = 30
UNKNOWN = "Unknown"


def extract_metadata(
    bundle: NormalizedBundle,
    now: datetime | None = None,
    parser: CryptographyParser | None = None,
) -> CertificateMetadata:
    """Describe the first certificate of a validated bundle."""
    parser = parser if parser is not None else CryptographyParser()
    certificate = parser.load_der(decode_payload(block_payload(bundle.blocks[0])))
    not_before = certificate.not_valid_before_utc
    not_after = certificate.not_valid_after_utc
    return CertificateMetadata(
        common_name=_common_name(certificate),
        issuer=certificate.issuer.rfc4514_string(),
        subject=certificate.subject.rfc4514_string(),
        valid_from=not_before.isoformat(),
        valid_to=not_after.isoformat(),
        algorithm=_key_algorithm(certificate),
        serial_number=format(certificate.serial_number, "x"),
        status=certificate_status(not_after, now),
    )


def certificate_status(not_after: datetime, now: datetime | None = None) -> str:
    now = now if now is not None else datetime.now(timezone.utc)
    if not_after < now:
        return "EXPIRED"
    days_left = math.ceil((not_after - now).total_seconds() / 86400)
    if days_left <= EXPIRING_SOON_DAYS:
        return "EXPIRING_SOON"
    return "VALID"


def _common_name(certificate: x509.Certificate) -> str:
    attributes = certificate.subject.get_attributes_for_oid(NameOID.COMMON_NAME)
    if attributes:
        value = attributes[0].value
        name = value.decode("utf-8", errors="replace") if isinstance(value, bytes) else value
        if name.strip():
            return name.strip()
    try:
        san = certificate.extensions.get_extension_for_class(x509.SubjectAlternativeName)
    except x509.ExtensionNotFound:
        return UNKNOWN
    except (x509.DuplicateExtension, x509.UnsupportedGeneralNameType, ValueError) as exc:
        Log.debug(f"Could not read SAN extension: {exc}")
        return UNKNOWN
    dns_names = san.value.get_values_for_type(x509.DNSName)
    return dns_names[0].lower() if dns_names else UNKNOWN


def _key_algorithm(certificate: x509.Certificate) -> str:
    try:
        key = certificate.public_key()
    except Exception:
        # unsupported key types (e.g. GOST) still produce a bundle
        return UNKNOWN
    if isinstance(key, rsa.RSAPublicKey):
        return "RSA"
    if isinstance(key, ec.EllipticCurvePublicKey):
        return "EC"
    if isinstance(key, ed25519.Ed25519PublicKey):
        return "Ed25519"
    if isinstance(key, ed448.Ed448PublicKey):
        return "Ed448"
    if isinstance(key, dsa.DSAPublicKey):
        return "DSA"
    return UNKNOWN
