import numpy as np
import pytest

from categorizer.features import encode, encode_batch, tokenize
from categorizer.vocabulary import Vocabulary


@pytest.fixture(scope="module")
def vocab():
    return Vocabulary().build()


def test_tokenize_lowercases_and_splits_on_punctuation():
    assert tokenize("Coffee, LUNCH & tip!!") == ["coffee", "lunch", "tip"]
    assert tokenize("") == []
    assert tokenize(None) == []
    assert tokenize("  --  ") == []


def test_encode_shape_and_presence(vocab):
    vec = encode("Coffee coffee COFFEE lunch", vocab)
    assert vec.shape == (vocab.feature_length,)
    assert vec[vocab.word_index("coffee")] == 1.0
    assert vec[vocab.word_index("lunch")] == 1.0
    # presence only, not frequency
    assert vec.sum() == 2.0
    assert vec[0] == 0.0


def test_empty_and_unknown_text_encode_to_zeros(vocab):
    assert not encode("", vocab).any()
    assert not encode("xyzxyz qqqq", vocab).any()


def test_encode_is_deterministic(vocab):
    a = encode("Uber ride to the hotel", vocab)
    b = encode("Uber ride to the hotel", vocab)
    assert np.array_equal(a, b)
    assert a.tobytes() == b.tobytes()


def test_encode_batch_stacks_rows(vocab):
    batch = encode_batch(["rent", "gym"], vocab)
    assert batch.shape == (2, vocab.feature_length)
    assert encode_batch([], vocab).shape == (0, vocab.feature_length)
