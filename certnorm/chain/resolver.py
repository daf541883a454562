"""Best-effort completion of a single-certificate upload with its issuer.

Every failure here degrades to the original leaf-only bundle; nothing this
module does can fail an upload.
"""

from cryptography import x509
from cryptography.x509.oid import AuthorityInformationAccessOID, ExtensionOID

from certnorm.chain.exceptions import ChainFetchFailedError
from certnorm.chain.fetcher_base import BaseIntermediateFetcher
from certnorm.chain.httpx_fetcher import HttpxIntermediateFetcher
from certnorm.chain.models import ChainAttempt, ChainOutcome
from certnorm.chain.ordering import ChainOrder, merge_chain
from certnorm.logging.logger import Log
from certnorm.normalization.block_validator import BlockValidator
from certnorm.normalization.classifier import classify
from certnorm.normalization.exceptions import NormalizationError
from certnorm.normalization.models import Classification, NormalizedBundle
from certnorm.normalization.pem import block_payload, decode_payload
from certnorm.normalization.text_decoder import normalize_line_endings
from certnorm.parsers.cryptography_adapter import CryptographyParser
from certnorm.parsers.exceptions import CertificateParseError

DEFAULT_FALLBACK_INTERMEDIATE_URL = "http://aia.entrust.net/l1k-chain256.cer"
CERTIFICATE_FILE_SUFFIXES = (".cer", ".crt", ".der", ".pem")


def ca_issuers_url(certificate: x509.Certificate) -> str | None:
    """First AIA CA Issuers URI that points at a certificate file, if any.

    Raises:
        x509.ExtensionNotFound: if the certificate has no AIA extension.
        ValueError: if the extension is present but cannot be decoded.
    """
    aia = certificate.extensions.get_extension_for_oid(
        ExtensionOID.AUTHORITY_INFORMATION_ACCESS
    )
    for description in aia.value:
        if description.access_method != AuthorityInformationAccessOID.CA_ISSUERS:
            continue
        location = description.access_location
        if not isinstance(location, x509.UniformResourceIdentifier):
            continue
        url = location.value
        lowered = url.lower()
        if lowered.startswith(("http://", "https://")) and lowered.endswith(
            CERTIFICATE_FILE_SUFFIXES
        ):
            return url
    return None


class ChainResolver:
    """Fetches the issuing intermediate of a lone leaf and merges it in."""

    def __init__(
        self,
        *,
        timeout_ms: int,
        order: ChainOrder = ChainOrder.INTERMEDIATE_FIRST,
        fallback_url: str = DEFAULT_FALLBACK_INTERMEDIATE_URL,
        fetcher: BaseIntermediateFetcher | None = None,
        parser: CryptographyParser | None = None,
    ) -> None:
        self._timeout_seconds = max(timeout_ms, 1) / 1000
        self._order = order
        self._fallback_url = fallback_url
        self._fetcher = fetcher if fetcher is not None else HttpxIntermediateFetcher()
        self._parser = parser if parser is not None else CryptographyParser()
        self._validator = BlockValidator(self._parser)

    def resolve(self, bundle: NormalizedBundle) -> tuple[NormalizedBundle, ChainAttempt | None]:
        """Return the bundle to keep and the attempt record (None when not attempted)."""
        if bundle.block_count != 1:
            Log.debug(f"Chain building skipped: bundle has {bundle.block_count} blocks")
            return bundle, None

        url = self._intermediate_url(bundle)
        Log.info(f"Fetching intermediate certificate from {url}")
        try:
            content = self._fetcher.fetch(url, self._timeout_seconds)
        except ChainFetchFailedError as exc:
            Log.warning(f"Chain building failed, keeping leaf only: {exc}")
            return bundle, ChainAttempt(url, ChainOutcome.FETCH_FAILED, detail=str(exc))

        intermediate_pem = self._to_pem(content)
        if intermediate_pem is None:
            Log.warning(f"Content fetched from {url} is not a certificate, keeping leaf only")
            return bundle, ChainAttempt(
                url, ChainOutcome.UNUSABLE, detail="fetched content is not a certificate"
            )

        try:
            intermediate = self._validator.validate(intermediate_pem)
        except NormalizationError as exc:
            Log.warning(f"Fetched intermediate failed validation, keeping leaf only: {exc}")
            return bundle, ChainAttempt(url, ChainOutcome.UNUSABLE, detail=str(exc))

        merged_text = merge_chain(bundle.pem, intermediate.pem, self._order)
        if len(merged_text.encode("utf-8")) <= len(bundle.pem.encode("utf-8")):
            Log.info("Chain building did not extend the bundle, keeping leaf only")
            return bundle, ChainAttempt(url, ChainOutcome.NOT_LONGER)

        merged = self._validator.validate(merged_text)
        Log.info(f"Built certificate chain with {merged.block_count} certificates")
        return merged, ChainAttempt(url, ChainOutcome.MERGED, merged=merged)

    def _intermediate_url(self, bundle: NormalizedBundle) -> str:
        try:
            leaf = self._parser.load_der(decode_payload(block_payload(bundle.blocks[0])))
            url = ca_issuers_url(leaf)
        except x509.ExtensionNotFound:
            Log.debug("Leaf has no AIA extension, using fallback intermediate URL")
            return self._fallback_url
        except (
            x509.DuplicateExtension,
            x509.UnsupportedGeneralNameType,
            ValueError,
            CertificateParseError,
        ) as exc:
            Log.debug(f"Could not read AIA extension ({exc}), using fallback intermediate URL")
            return self._fallback_url
        if url is None:
            Log.debug("AIA extension has no CA Issuers certificate URL, using fallback")
            return self._fallback_url
        return url

    def _to_pem(self, content: bytes) -> str | None:
        if classify(content) is Classification.BINARY:
            try:
                return self._parser.der_to_pem(content)
            except CertificateParseError as exc:
                Log.debug(f"Fetched intermediate is not DER: {exc}")
                return None
        text = content.decode("utf-8", errors="replace").strip()
        return normalize_line_endings(text) if text else None
