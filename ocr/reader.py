# ocr/reader.py
from __future__ import annotations
import argparse
from dataclasses import dataclass
from math import floor
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import cv2
import easyocr
import numpy as np
from PIL import Image, UnidentifiedImageError

IMAGE_EXTS = {".jpg", ".jpeg", ".png", ".bmp", ".tif", ".tiff", ".webp"}


@dataclass
class OCRSpan:
    text: str
    confidence: float
    bbox: List[Tuple[float, float]]  # [[x1,y1], [x2,y2], [x3,y3], [x4,y4]]


def _preprocess_strong(np_img: np.ndarray) -> np.ndarray:
    gray = cv2.cvtColor(np_img, cv2.COLOR_RGB2GRAY)
    gray = cv2.bilateralFilter(gray, d=7, sigmaColor=50, sigmaSpace=50)
    clahe = cv2.createCLAHE(clipLimit=2.0, tileGridSize=(8, 8))
    gray = clahe.apply(gray)
    thr = cv2.adaptiveThreshold(
        gray, 255, cv2.ADAPTIVE_THRESH_MEAN_C, cv2.THRESH_BINARY, 31, 10
    )
    return cv2.cvtColor(thr, cv2.COLOR_GRAY2RGB)


def _center(bbox: List[Tuple[float, float]]) -> Tuple[float, float]:
    xs = [p[0] for p in bbox]
    ys = [p[1] for p in bbox]
    return sum(xs) / len(xs), sum(ys) / len(ys)


def _dedupe_spans(spans: List[OCRSpan]) -> List[OCRSpan]:
    # de-dupe by (lowercased text, quantized center), keep highest confidence;
    # first-seen order is kept so the top line stays first
    best: Dict[tuple, OCRSpan] = {}
    for s in spans:
        cx, cy = _center(s.bbox)
        key = (s.text.strip().lower(), floor(cx / 10), floor(cy / 10))
        if key not in best or s.confidence > best[key].confidence:
            best[key] = s
    return list(best.values())


class Reader:
    """EasyOCR over receipt images, dual pass (raw + contrast-enhanced)."""

    def __init__(
        self,
        languages: Optional[List[str]] = None,
        gpu: bool = False,
        min_confidence: float = 0.45,  # slightly lower to catch faint decimals
        paragraph: bool = False,  # keep rows separate for receipts
    ):
        self.languages = languages or ["en"]
        self.min_confidence = float(min_confidence)
        self.paragraph = bool(paragraph)
        self._reader = easyocr.Reader(self.languages, gpu=gpu, verbose=False)

    @classmethod
    def from_config(cls, cfg: Optional[Dict[str, Any]] = None) -> "Reader":
        cfg = cfg or {}
        return cls(
            languages=list(cfg.get("languages", ["en"])),
            gpu=bool(cfg.get("gpu", False)),
            min_confidence=float(cfg.get("min_confidence", 0.45)),
            paragraph=bool(cfg.get("paragraph", False)),
        )

    def read(self, path: Union[str, Path]) -> List[OCRSpan]:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Input not found: {path}")
        if path.suffix.lower() not in IMAGE_EXTS:
            raise ValueError(f"Unsupported file type: {path.suffix.lower()}")
        try:
            img = Image.open(path).convert("RGB")
        except UnidentifiedImageError as e:
            raise ValueError(f"Cannot open image: {path}") from e

        np_img = np.array(img)
        all_spans: List[OCRSpan] = []
        for npv in (np_img, _preprocess_strong(np_img)):
            all_spans.extend(self._run_easyocr(npv))
        return _dedupe_spans(all_spans)

    def to_plaintext(self, spans: List[OCRSpan]) -> str:
        return "\n".join(s.text for s in spans if s.text).strip()

    def read_text(self, path: Union[str, Path]) -> str:
        return self.to_plaintext(self.read(path))

    def _run_easyocr(self, np_img: np.ndarray) -> List[OCRSpan]:
        results = self._reader.readtext(np_img, detail=1, paragraph=self.paragraph)
        spans: List[OCRSpan] = []
        for item in results:
            if len(item) == 3:
                bbox, text, conf = item
            elif len(item) == 2:
                bbox, text = item
                conf = 1.0
            else:
                continue

            if not text or bbox is None:
                continue
            try:
                conf_f = float(conf)
            except (TypeError, ValueError):
                conf_f = 1.0
            if conf_f < self.min_confidence:
                continue

            spans.append(OCRSpan(text=text.strip(), confidence=conf_f, bbox=bbox))
        return spans


def read_image_text(path: Union[str, Path], **reader_kwargs) -> str:
    """One-shot helper: OCR an image and return its plain text."""
    return Reader(**reader_kwargs).read_text(path)


def _cli():
    p = argparse.ArgumentParser(description="Run EasyOCR on a receipt image.")
    p.add_argument("--input", required=True)
    p.add_argument("--lang", nargs="+", default=["en"])
    p.add_argument("--gpu", action="store_true")
    p.add_argument("--min_conf", type=float, default=0.45)
    args = p.parse_args()
    text = read_image_text(
        args.input, languages=args.lang, gpu=args.gpu, min_confidence=args.min_conf
    )
    print(text)


if __name__ == "__main__":
    _cli()
