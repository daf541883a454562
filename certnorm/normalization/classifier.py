"""Binary vs text detection for uploads of unknown encoding.

This is a heuristic, not a guarantee: a DER certificate almost always starts
with the ASN.1 SEQUENCE tag, and a PEM or Base64 file is almost entirely
printable ASCII. Anything that slips through is caught by the decoder that
the classification selects.
"""

from certnorm.normalization.models import Classification

ASN1_SEQUENCE_TAG = 0x30
SAMPLE_SIZE = 100
NON_PRINTABLE_THRESHOLD = 0.30

_PRINTABLE_MIN = 32
_PRINTABLE_MAX = 126


def non_printable_ratio(data: bytes, sample_size: int = SAMPLE_SIZE) -> float:
    """Share of bytes outside printable ASCII [32, 126] in the leading sample.

    Tabs and line breaks count as non-printable.
    """
    sample = data[:sample_size]
    if not sample:
        return 0.0
    non_printable = sum(1 for b in sample if b < _PRINTABLE_MIN or b > _PRINTABLE_MAX)
    return non_printable / len(sample)


def classify(data: bytes) -> Classification:
    if data and data[0] == ASN1_SEQUENCE_TAG:
        return Classification.BINARY
    if non_printable_ratio(data) > NON_PRINTABLE_THRESHOLD:
        return Classification.BINARY
    return Classification.TEXT
