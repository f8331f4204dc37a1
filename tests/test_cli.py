import json

import pytest
from loguru import logger

from finance_tracker import cli


@pytest.fixture(autouse=True)
def _drop_cli_sinks():
    yield
    # main() binds a sink to the captured stderr
    logger.remove()


def test_cli_offline_prints_parsed_json(capsys):
    code = cli.main(["--offline", "Coffee", "at", "Starbucks", "$6.50"])

    assert code == 0
    out = json.loads(capsys.readouterr().out)
    assert out == {
        "amount": 6.5,
        "description": "Coffee at Starbucks",
        "category": "Food & Dining",
        "type": "expense",
        "confidence": 1.0,
    }


def test_cli_rejects_blank_input(capsys):
    code = cli.main(["--offline", "   "])

    assert code == 2
    assert "Input text is required" in capsys.readouterr().err
