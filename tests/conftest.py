from collections.abc import Callable
from datetime import datetime, timedelta, timezone

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import AuthorityInformationAccessOID, NameOID

AIA_URL = "http://ca.example.test/intermediate.cer"

CertificateFactory = Callable[..., x509.Certificate]


def _name(common_name: str) -> x509.Name:
    return x509.Name(
        [
            x509.NameAttribute(NameOID.ORGANIZATION_NAME, "Certnorm Test"),
            x509.NameAttribute(NameOID.COMMON_NAME, common_name),
        ]
    )


@pytest.fixture(scope="session")
def issuer_key() -> ec.EllipticCurvePrivateKey:
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def make_certificate(issuer_key: ec.EllipticCurvePrivateKey) -> CertificateFactory:
    """Return a factory building EC certificates signed by one session issuer key.

    A certificate without an explicit issuer_name is self-issued.
    """

    def _make(
        common_name: str | None = "leaf.example.com",
        *,
        issuer_name: str | None = None,
        serial_number: int | None = None,
        aia_urls: tuple[str, ...] = (),
        dns_names: tuple[str, ...] = (),
        not_before: datetime | None = None,
        not_after: datetime | None = None,
        is_ca: bool = False,
        extra_extensions: tuple[x509.ExtensionType, ...] = (),
    ) -> x509.Certificate:
        now = datetime.now(timezone.utc)
        subject = _name(common_name) if common_name else x509.Name(
            [x509.NameAttribute(NameOID.ORGANIZATION_NAME, "Certnorm Test")]
        )
        issuer = _name(issuer_name) if issuer_name else subject
        key = ec.generate_private_key(ec.SECP256R1())
        builder = (
            x509.CertificateBuilder()
            .subject_name(subject)
            .issuer_name(issuer)
            .public_key(key.public_key())
            .serial_number(serial_number or x509.random_serial_number())
            .not_valid_before(not_before or now - timedelta(days=1))
            .not_valid_after(not_after or now + timedelta(days=365))
            .add_extension(x509.BasicConstraints(ca=is_ca, path_length=None), critical=True)
        )
        if aia_urls:
            builder = builder.add_extension(
                x509.AuthorityInformationAccess(
                    [
                        x509.AccessDescription(
                            AuthorityInformationAccessOID.CA_ISSUERS,
                            x509.UniformResourceIdentifier(url),
                        )
                        for url in aia_urls
                    ]
                ),
                critical=False,
            )
        if dns_names:
            builder = builder.add_extension(
                x509.SubjectAlternativeName([x509.DNSName(n) for n in dns_names]),
                critical=False,
            )
        for extension in extra_extensions:
            builder = builder.add_extension(extension, critical=False)
        return builder.sign(issuer_key, hashes.SHA256())

    return _make


def _to_pem(certificate: x509.Certificate) -> str:
    return certificate.public_bytes(serialization.Encoding.PEM).decode("ascii")


def _to_der(certificate: x509.Certificate) -> bytes:
    return certificate.public_bytes(serialization.Encoding.DER)


@pytest.fixture(scope="session")
def leaf_certificate(make_certificate: CertificateFactory) -> x509.Certificate:
    return make_certificate("leaf.example.com", dns_names=("leaf.example.com",))


@pytest.fixture(scope="session")
def leaf_pem(leaf_certificate: x509.Certificate) -> str:
    return _to_pem(leaf_certificate)


@pytest.fixture(scope="session")
def leaf_der(leaf_certificate: x509.Certificate) -> bytes:
    return _to_der(leaf_certificate)


@pytest.fixture(scope="session")
def second_pem(make_certificate: CertificateFactory) -> str:
    return _to_pem(make_certificate("second.example.com"))


@pytest.fixture(scope="session")
def intermediate_certificate(make_certificate: CertificateFactory) -> x509.Certificate:
    return make_certificate("Certnorm Test Intermediate CA", is_ca=True)


@pytest.fixture(scope="session")
def leaf_with_aia(make_certificate: CertificateFactory) -> x509.Certificate:
    return make_certificate(
        "aia.example.com",
        issuer_name="Certnorm Test Intermediate CA",
        aia_urls=("http://ocsp.example.test/status", AIA_URL),
    )


@pytest.fixture(scope="session")
def intermediate_pem(intermediate_certificate: x509.Certificate) -> str:
    return _to_pem(intermediate_certificate)


@pytest.fixture(scope="session")
def intermediate_der(intermediate_certificate: x509.Certificate) -> bytes:
    return _to_der(intermediate_certificate)


@pytest.fixture(scope="session")
def leaf_with_aia_pem(leaf_with_aia: x509.Certificate) -> str:
    return _to_pem(leaf_with_aia)


@pytest.fixture(scope="session")
def aia_url() -> str:
    return AIA_URL


@pytest.fixture(scope="session")
def duplicate_extension_der(make_certificate: CertificateFactory) -> bytes:
    """A CN-less certificate whose two private extensions share one OID.

    The second OID is rewritten after signing, so parsing succeeds and only
    reading the extensions fails.
    """
    certificate = make_certificate(
        None,
        extra_extensions=(
            x509.UnrecognizedExtension(x509.ObjectIdentifier("1.2.3.4.5.6"), b"\x05\x00"),
            x509.UnrecognizedExtension(x509.ObjectIdentifier("1.2.3.4.5.7"), b"\x05\x00"),
        ),
    )
    der = _to_der(certificate)
    return der.replace(b"\x06\x05\x2a\x03\x04\x05\x07", b"\x06\x05\x2a\x03\x04\x05\x06")


@pytest.fixture(scope="session")
def padded_leaf_der(make_certificate: CertificateFactory) -> bytes:
    """A DER certificate whose Base64 form ends in `=` padding."""
    for _ in range(50):
        der = _to_der(make_certificate("padded.example.com"))
        if len(der) % 3:
            return der
    raise RuntimeError("could not generate a certificate needing Base64 padding")
