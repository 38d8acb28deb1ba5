from pathlib import Path

import pytest

EXAMPLES_DIR = Path(__file__).parent.parent / 'examples'


@pytest.fixture
def example_source():
    def load(name):
        with open(EXAMPLES_DIR / name, 'r', encoding='utf-8') as f:
            return f.read()
    return load
