import json
from typing import Dict, List

import pytest

from tests import INPUT_DIR


@pytest.fixture
def example_snaks() -> List[Dict]:
    with open(INPUT_DIR / "snaks.json") as file:
        return json.load(file)
