# categorizer/model.py
"""
Small feed-forward text classifier over presence vectors.

    features -> Linear(hidden) -> ReLU -> Dropout -> Linear(n_categories)

Softmax is applied at inference; training uses cross-entropy against one-hot
targets with Adam. The model lives in process memory only.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Any, Dict, Iterable, Optional

import numpy as np
import torch
import torch.nn as nn

from spend_core.models import TrainingExample
from categorizer.features import encode_batch
from categorizer.vocabulary import Vocabulary

log = logging.getLogger("categorizer.model")


@dataclass
class ModelSettings:
    epochs: int = 50
    batch_size: int = 4
    hidden_units: int = 128
    dropout: float = 0.5
    learning_rate: float = 1e-3
    seed: Optional[int] = None

    @classmethod
    def from_config(cls, cfg: Optional[Dict[str, Any]]) -> "ModelSettings":
        """Build from a ``[model]`` config table; unknown keys are ignored."""
        cfg = cfg or {}
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in cfg.items() if k in known})


class CategoryNet(nn.Module):
    def __init__(self, input_dim: int, hidden_dim: int, num_classes: int, dropout: float):
        super().__init__()
        self.net = nn.Sequential(
            nn.Linear(input_dim, hidden_dim),
            nn.ReLU(),
            nn.Dropout(dropout),
            nn.Linear(hidden_dim, num_classes),
        )

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        return self.net(x)


def _one_hot(ids: np.ndarray, num_classes: int) -> np.ndarray:
    out = np.zeros((len(ids), num_classes), dtype=np.float32)
    out[np.arange(len(ids)), ids] = 1.0
    return out


def train_model(
    vocabulary: Vocabulary,
    corpus: Iterable[TrainingExample],
    settings: Optional[ModelSettings] = None,
) -> CategoryNet:
    """Fit a fresh CategoryNet on the corpus. Raises on any numeric failure."""
    settings = settings or ModelSettings()
    vocabulary.require_built()
    examples = list(corpus)
    if not examples:
        raise ValueError("Cannot train on an empty corpus")

    generator = torch.Generator()
    if settings.seed is not None:
        torch.manual_seed(settings.seed)
        generator.manual_seed(settings.seed)

    X = torch.from_numpy(encode_batch([e.text for e in examples], vocabulary))
    ids = np.array([vocabulary.category_id(e.category) for e in examples])
    Y = torch.from_numpy(_one_hot(ids, vocabulary.num_categories))

    model = CategoryNet(
        input_dim=vocabulary.feature_length,
        hidden_dim=settings.hidden_units,
        num_classes=vocabulary.num_categories,
        dropout=settings.dropout,
    )
    optimizer = torch.optim.Adam(model.parameters(), lr=settings.learning_rate)
    # soft-target cross-entropy == categorical cross-entropy on one-hot labels
    criterion = nn.CrossEntropyLoss()

    n = len(examples)
    avg_loss = float("nan")
    for epoch in range(settings.epochs):
        model.train()
        total_loss = 0.0
        order = torch.randperm(n, generator=generator)
        for start in range(0, n, settings.batch_size):
            idx = order[start:start + settings.batch_size]
            optimizer.zero_grad()
            logits = model(X[idx])
            loss = criterion(logits, Y[idx])
            loss.backward()
            optimizer.step()
            total_loss += loss.item() * len(idx)

        avg_loss = total_loss / n
        log.debug("Epoch %d/%d - loss=%.4f", epoch + 1, settings.epochs, avg_loss)

    model.eval()
    log.info(
        "Model trained on %d examples (%d epochs, final loss=%.4f)",
        n,
        settings.epochs,
        avg_loss,
    )
    return model


def predict_proba(model: CategoryNet, features: np.ndarray) -> np.ndarray:
    """Class probabilities for one feature vector."""
    model.eval()
    with torch.no_grad():
        x = torch.from_numpy(np.asarray(features, dtype=np.float32)).unsqueeze(0)
        probs = torch.softmax(model(x), dim=1)
        return probs.squeeze(0).cpu().numpy()
