from certnorm.normalization.classifier import (
    NON_PRINTABLE_THRESHOLD,
    SAMPLE_SIZE,
    classify,
    non_printable_ratio,
)
from certnorm.normalization.models import Classification


class TestClassifyBinary:
    def test_sequence_tag_is_binary(self) -> None:
        assert classify(b"\x30\x82\x01\x0a") is Classification.BINARY

    def test_sequence_tag_wins_even_for_printable_rest(self) -> None:
        assert classify(b"0" + b"A" * 200) is Classification.BINARY

    def test_der_certificate_is_binary(self, leaf_der: bytes) -> None:
        assert classify(leaf_der) is Classification.BINARY

    def test_mostly_non_printable_is_binary(self) -> None:
        assert classify(b"\x00\xff" * 60) is Classification.BINARY

    def test_just_over_threshold_is_binary(self) -> None:
        data = b"\x01" * 31 + b"A" * 69
        assert classify(data) is Classification.BINARY


class TestClassifyText:
    def test_pem_is_text(self, leaf_pem: str) -> None:
        assert classify(leaf_pem.encode()) is Classification.TEXT

    def test_plain_english_is_text(self) -> None:
        assert classify(b"Hello, this is not a certificate.") is Classification.TEXT

    def test_exactly_at_threshold_is_text(self) -> None:
        data = b"\x01" * 30 + b"A" * 70
        assert classify(data) is Classification.TEXT

    def test_only_leading_sample_is_inspected(self) -> None:
        data = b"A" * SAMPLE_SIZE + b"\x00" * 500
        assert classify(data) is Classification.TEXT

    def test_empty_input_is_text(self) -> None:
        assert classify(b"") is Classification.TEXT


class TestNonPrintableRatio:
    def test_counts_line_breaks_as_non_printable(self) -> None:
        assert non_printable_ratio(b"ab\r\n") == 0.5

    def test_empty_is_zero(self) -> None:
        assert non_printable_ratio(b"") == 0.0

    def test_threshold_constant(self) -> None:
        assert NON_PRINTABLE_THRESHOLD == 0.30
