import importlib
import sys
import types
import pytest

from PIL import Image, ImageDraw

from categorizer.model import ModelSettings
from categorizer.service import CategorizerService

RECEIPT_LINES = [
    "STARBUCKS COFFEE",
    "123 Main St",
    "09/14/2025 08:12",
    "Latte 4.95",
    "Croissant 3.25",
    "Total $8.20",
]


@pytest.fixture
def fast_settings():
    return ModelSettings(epochs=50, batch_size=4, seed=7)


@pytest.fixture
def service(fast_settings):
    """Fresh service per test: no shared vocabulary or model."""
    return CategorizerService(settings=fast_settings)


@pytest.fixture
def sample_receipt_txt(tmp_path):
    p = tmp_path / "receipt.txt"
    p.write_text("\n".join(RECEIPT_LINES) + "\n", encoding="utf-8")
    return p


@pytest.fixture
def sample_receipt_image(tmp_path):
    """Tiny PNG for OCR tests. EasyOCR is stubbed, so content can be minimal."""
    img_path = tmp_path / "receipt.png"
    img = Image.new("RGB", (600, 300), "white")
    d = ImageDraw.Draw(img)
    d.text((20, 20), "\n".join(RECEIPT_LINES), fill="black")
    img.save(img_path)
    return img_path


@pytest.fixture
def transactions_csv(tmp_path):
    p = tmp_path / "transactions.csv"
    p.write_text(
        "name,amount,date\n"
        "Uber ride downtown,23.50,2025-09-01\n"
        "Netflix monthly,15.99,2025-09-02\n"
        ",10.00,2025-09-03\n"
        "Landlord rent,\"$1,450.00\",2025-09-05\n"
        "Mystery xyzxyz,7.00,\n",
        encoding="utf-8",
    )
    return p


class _FakeEasyOCRReader:
    def __init__(self, *_, **__):
        pass

    def readtext(self, image, detail=1, paragraph=False):
        return [
            ([(0, 10 * i), (100, 10 * i), (100, 10 * i + 8), (0, 10 * i + 8)], t, 0.95)
            for i, t in enumerate(RECEIPT_LINES)
        ] + [([(0, 500), (10, 500), (10, 508), (0, 508)], "smudge", 0.10)]


@pytest.fixture
def fake_easyocr(monkeypatch):
    # Create a fake 'easyocr' module that provides Reader
    fake = types.ModuleType("easyocr")
    fake.Reader = _FakeEasyOCRReader
    monkeypatch.setitem(sys.modules, "easyocr", fake)

    # Reload our wrapper so it picks up the fake module no matter how it imports
    import ocr.reader as reader_mod

    importlib.reload(reader_mod)
    return _FakeEasyOCRReader
