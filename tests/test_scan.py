import pytest

from pipeline.scan import scan_receipt


class _StubReader:
    def __init__(self, text):
        self.text = text
        self.calls = []

    def read_text(self, path):
        self.calls.append(path)
        return self.text


def test_scan_txt_receipt(service, sample_receipt_txt):
    result = scan_receipt(sample_receipt_txt, service)
    assert result.scan.merchant == "STARBUCKS COFFEE"
    assert result.category == "Food & Beverage"
    assert result.source_path == str(sample_receipt_txt)


def test_scan_image_uses_reader(service, tmp_path):
    img = tmp_path / "r.jpg"
    img.write_bytes(b"not really an image")
    reader = _StubReader("Uber Trip\n04/02/2025\n$18.40\n")
    result = scan_receipt(img, service, reader=reader)
    assert reader.calls == [img]
    assert result.scan.amount == "18.40"
    assert result.scan.date == "2025-04-02"
    assert result.category == "Transportation"


def test_scan_without_merchant_is_other(service, tmp_path):
    img = tmp_path / "blank.png"
    img.write_bytes(b"")
    result = scan_receipt(img, service, reader=_StubReader("   \n"))
    assert result.scan.merchant is None
    assert result.category == "Other"


def test_scan_missing_file(service, tmp_path):
    with pytest.raises(FileNotFoundError):
        scan_receipt(tmp_path / "nope.txt", service)
