def test_imports_smoke():
    import numpy as np
    import pandas as pd
    import torch

    # sanity
    assert np.array([1, 2, 3]).sum() == 6
    assert pd.DataFrame({"a": [1]}).shape == (1, 1)
    assert torch.zeros(3).shape == (3,)


def test_public_api():
    import categorizer

    assert len(categorizer.CATEGORIES) == 12
    assert callable(categorizer.predict_category)
    assert callable(categorizer.predict_category_with_model)
    assert callable(categorizer.record_user_correction)
